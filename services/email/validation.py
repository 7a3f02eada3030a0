# services/email/validation.py

"""
validation.py
-------------
필수 파라미터 존재 여부 검사 (타입 검사 X).
- 키 없음, None, False, 빈 문자열, 0 / NaN → 누락
- 그 외 값(빈 list/dict 포함) → 존재
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence

WEBHOOK_REQUIRED: tuple[str, ...] = (
    "origin", "pass", "smtp", "port", "dest", "subject", "body",
)
EMAIL_APPROVED_REQUIRED: tuple[str, ...] = (
    "origin", "pass", "smtp", "port", "dest", "req_email", "user_pass",
)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    missing: List[str] = field(default_factory=list)


def is_missing(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        # NaN != NaN
        return value == 0 or value != value
    return False


def validate_required_fields(body: Mapping[str, Any], required: Sequence[str]) -> ValidationResult:
    """누락된 키를 required 순서대로 반환."""
    missing = [key for key in required if is_missing(body.get(key))]
    return ValidationResult(valid=not missing, missing=missing)
