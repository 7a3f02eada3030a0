# services/email/adapter.py
from __future__ import annotations
import logging
from typing import Any, Dict
from urllib.parse import urlsplit, urlunsplit
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from .schemas import WebhookResponse
from config import WEBHOOK_URL, WEBHOOK_TIMEOUT

logger = logging.getLogger(__name__)

def _session() -> requests.Session:
    s = requests.Session()
    # 연결 실패만 재시도. 응답을 받은 POST는 재시도하지 않음 (중복 발송 방지)
    retries = Retry(
        total=3, connect=3, read=0, status=0,
        backoff_factor=0.5,
        allowed_methods=frozenset(["POST"]),
        raise_on_status=False,
    )
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s

def approved_url(webhook_url: str) -> str:
    """웹훅 URL의 마지막 경로 조각만 email-approved 로 교체."""
    parts = urlsplit(webhook_url)
    base, _, _ = parts.path.rstrip("/").rpartition("/")
    return urlunsplit(parts._replace(path=f"{base}/email-approved"))

def send_via_webhook(payload: Dict[str, Any], url: str | None = None) -> WebhookResponse:
    """웹훅 서버로 JSON을 POST 하고 결과를 WebhookResponse로 반환."""
    target = url or WEBHOOK_URL
    try:
        r = _session().post(target, json=payload, timeout=WEBHOOK_TIMEOUT)
    except requests.RequestException as e:
        logger.warning("webhook request failed: %s", e)
        return WebhookResponse(ok=False, status_code=0, detail=str(e))

    data = r.json() if r.headers.get("content-type", "").startswith("application/json") else {}
    if r.status_code >= 400:
        return WebhookResponse(
            ok=False,
            status_code=r.status_code,
            detail=data.get("message") or data.get("error") or r.text,
            missing=data.get("missing", []),
        )
    return WebhookResponse(
        ok=bool(data.get("success")),
        status_code=r.status_code,
        message_id=data.get("messageId"),
        detail=data.get("message"),
    )

def send_email(
    origin: str, password: str, smtp: str, port: int | str, dest: str,
    subject: str, body: str, html: str | None = None, url: str | None = None,
) -> WebhookResponse:
    payload = {
        "origin": origin, "pass": password, "smtp": smtp, "port": port,
        "dest": dest, "subject": subject, "body": body,
    }
    if html:
        payload["html"] = html
    return send_via_webhook(payload, url=url)

def send_email_approved(
    origin: str, password: str, smtp: str, port: int | str, dest: str,
    req_email: str, user_pass: str, url: str | None = None,
) -> WebhookResponse:
    """
    승인 알림 템플릿 엔드포인트 호출.
    url 은 웹훅 URL (기본 WEBHOOK_URL). 마지막 경로를 /email-approved 로 바꿔 호출.
    """
    payload = {
        "origin": origin, "pass": password, "smtp": smtp, "port": port,
        "dest": dest, "req_email": req_email, "user_pass": user_pass,
    }
    resp = send_via_webhook(payload, url=approved_url(url or WEBHOOK_URL))
    if not resp.ok:
        logger.warning("Email approval send failed: %s %s", resp.status_code, resp.detail)
    return resp
