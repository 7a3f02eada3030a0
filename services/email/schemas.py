# services/email/schemas.py
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from typing import Any, List, Optional, Union

class EmailConfig(BaseModel):
    """요청 본문에서 만든 발송 설정. 비밀번호는 wire 상에서 'pass' 키를 쓴다."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    origin: str
    password: str = Field(..., alias="pass")
    smtp: str
    port: Union[int, str]
    dest: str
    subject: str = ""
    body: str = ""
    html: Optional[str] = None

    @field_validator("origin", "password", "smtp", "port", "dest", "subject", "body", "html", mode="before")
    @classmethod
    def _bool_to_str(cls, v: Any, info: ValidationInfo) -> Any:
        # true/false 는 JSON 표기 그대로 문자열로. html=false 는 미지정과 같다
        if v is False and info.field_name == "html":
            return None
        if isinstance(v, bool):
            return "true" if v else "false"
        return v

class SendResult(BaseModel):
    message_id: str
    accepted: List[str] = Field(default_factory=list)
    rejected: List[str] = Field(default_factory=list)

class WebhookResponse(BaseModel):
    ok: bool
    status_code: int
    message_id: Optional[str] = None
    detail: Optional[str] = None
    missing: List[str] = Field(default_factory=list)
