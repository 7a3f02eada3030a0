# webhook_server/main.py
"""
SMTP webhook server 실행. uvicorn webhook_server.main:app --reload
또는 smtp-webhook (PORT 환경 변수, 기본 3000)
"""
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Sequence

import json, logging
import uvicorn

from config import HOST, PORT, LOG_LEVEL, SERVICE_NAME, SERVICE_VERSION
from services.email.schemas import EmailConfig
from services.email.templates import TEMPLATE_NAME, render_email_approved
from services.email.transport import describe_error, send_email
from services.email.validation import (
    EMAIL_APPROVED_REQUIRED,
    WEBHOOK_REQUIRED,
    validate_required_fields,
)

WEBHOOK_PATHS = ("/webhook", "/api/webhook")
EMAIL_APPROVED_PATHS = ("/email-approved", "/api/email-approved")
RELAY_PATHS = WEBHOOK_PATHS + EMAIL_APPROVED_PATHS

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)
logger = logging.getLogger("webhook")
logging.basicConfig(level=LOG_LEVEL.upper(), format="%(asctime)s | %(levelname)s | %(message)s")


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@app.middleware("http")
async def cors(request: Request, call_next):
    # preflight는 라우트와 무관하게 200 + 빈 본문
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and request.url.path in RELAY_PATHS:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Method not allowed", "message": "Only POST requests are accepted"},
            headers=exc.headers,
        )
    return await http_exception_handler(request, exc)


async def _read_payload(request: Request) -> Dict[str, Any]:
    """JSON 또는 form 본문을 dict로. JSON 객체가 아니면 빈 dict."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    raw = await request.body()
    if not raw.strip():
        return {}
    payload = json.loads(raw)
    return payload if isinstance(payload, dict) else {}


async def _relay(
    request: Request,
    *,
    required: Sequence[str],
    build_config: Callable[[Dict[str, Any]], EmailConfig],
    success_message: str,
    failure_message: str,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    try:
        payload = await _read_payload(request)
    except (ValueError, RecursionError) as e:
        # 너무 깊게 중첩된 JSON은 RecursionError
        return JSONResponse(
            status_code=400, content={"error": "Invalid JSON body", "message": str(e)}
        )

    validation = validate_required_fields(payload, required)
    if not validation.valid:
        logger.warning("missing params path=%s missing=%s", request.url.path, validation.missing)
        return JSONResponse(
            status_code=400,
            content={
                "error": "Missing required parameters",
                "missing": validation.missing,
                "required": list(required),
            },
        )

    logger.info(
        "recv path=%s dest=%s smtp=%s:%s",
        request.url.path, payload.get("dest"), payload.get("smtp"), payload.get("port"),
    )

    try:
        config = build_config(payload)
        result = await send_email(config)
    except Exception as e:
        logger.exception("send error")
        return JSONResponse(
            status_code=500,
            content={"error": failure_message, "message": describe_error(e), "timestamp": _timestamp()},
        )

    logger.info("sent message_id=%s dest=%s", result.message_id, config.dest)
    content = {
        "success": True,
        "message": success_message,
        "messageId": result.message_id,
        "timestamp": _timestamp(),
    }
    if extra:
        content.update(extra)
    return JSONResponse(status_code=200, content=content)


def _webhook_config(payload: Dict[str, Any]) -> EmailConfig:
    return EmailConfig.model_validate(payload)


def _email_approved_config(payload: Dict[str, Any]) -> EmailConfig:
    rendered = render_email_approved(payload["req_email"], payload["user_pass"])
    return EmailConfig(
        origin=payload["origin"],
        password=payload["pass"],
        smtp=payload["smtp"],
        port=payload["port"],
        dest=payload["dest"],
        subject=rendered.subject,
        body=rendered.text,
        html=rendered.html,
    )


@app.get("/")
async def index():
    return {
        "message": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "endpoints": {
            "webhook": "POST /webhook",
            "api_webhook": "POST /api/webhook",
            "email_approved": "POST /email-approved",
            "api_email_approved": "POST /api/email-approved",
        },
        "status": "running",
    }

@app.get("/health")
async def health():
    return {"ok": True}

@app.post("/webhook")
@app.post("/api/webhook")
async def handle_webhook(request: Request):
    return await _relay(
        request,
        required=WEBHOOK_REQUIRED,
        build_config=_webhook_config,
        success_message="Email sent successfully",
        failure_message="Failed to send email",
    )

@app.post("/email-approved")
@app.post("/api/email-approved")
async def handle_email_approved(request: Request):
    return await _relay(
        request,
        required=EMAIL_APPROVED_REQUIRED,
        build_config=_email_approved_config,
        success_message="Email approval notification sent successfully",
        failure_message="Failed to send email approval notification",
        extra={"template": TEMPLATE_NAME},
    )


def run() -> None:
    logger.info("🚀 %s running on port %d", SERVICE_NAME, PORT)
    for path in RELAY_PATHS:
        logger.info("📧 POST endpoint available at: http://localhost:%d%s", PORT, path)
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
