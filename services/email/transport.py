# services/email/transport.py

"""
transport.py
------------
요청마다 SMTP 연결을 새로 열어 메일 한 통을 보낸다.
- 465 포트 → SMTP_SSL (implicit TLS)
- 그 외 → SMTP + 서버가 지원하면 STARTTLS
재시도·백오프 없음. 예외는 그대로 호출자에게 전달.
"""

from __future__ import annotations
import logging, re, ssl
from email.message import EmailMessage
from email.utils import getaddresses, make_msgid
from smtplib import SMTP, SMTP_SSL, SMTPResponseException
from typing import Union

from starlette.concurrency import run_in_threadpool

from config import SMTP_TIMEOUT
from .schemas import EmailConfig, SendResult

logger = logging.getLogger(__name__)

IMPLICIT_TLS_PORT = 465
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LINE_BREAKS = re.compile(r"[\r\n]+")


def parse_port(value: Union[int, float, str]) -> int:
    """앞쪽 정수만 읽는다 ("587" → 587, "25abc" → 25)."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid SMTP port: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    m = _LEADING_INT.match(str(value))
    if not m:
        raise ValueError(f"Invalid SMTP port: {value!r}")
    return int(m.group(1))


def is_implicit_tls(port: int) -> bool:
    return port == IMPLICIT_TLS_PORT


def _header(value: str) -> str:
    # 헤더 값의 줄바꿈은 공백 하나로
    return _LINE_BREAKS.sub(" ", value)


def build_message(config: EmailConfig) -> EmailMessage:
    _, at, domain = config.origin.rpartition("@")
    msg = EmailMessage()
    msg["From"] = _header(config.origin)
    msg["To"] = _header(config.dest)
    msg["Subject"] = _header(config.subject)
    msg["Message-ID"] = make_msgid(domain=(domain if at and domain else None))
    msg.set_content(config.body)
    # html 미지정(또는 빈 값)이면 body를 HTML 파트로도 사용
    msg.add_alternative(config.html or config.body, subtype="html")
    return msg


def _send_via_smtp(config: EmailConfig, timeout: float) -> SendResult:
    port = parse_port(config.port)
    msg = build_message(config)
    context = ssl.create_default_context()

    if is_implicit_tls(port):
        with SMTP_SSL(config.smtp, port, timeout=timeout, context=context) as server:
            server.login(config.origin, config.password)
            refused = server.send_message(msg)
    else:
        with SMTP(config.smtp, port, timeout=timeout) as server:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls(context=context)
                server.ehlo()
            server.login(config.origin, config.password)
            refused = server.send_message(msg)

    # refused 키는 bare address
    rejected = list(refused)
    accepted = [
        addr for _, addr in getaddresses([_header(config.dest)])
        if addr and addr not in refused
    ]
    return SendResult(message_id=str(msg["Message-ID"]), accepted=accepted, rejected=rejected)


async def send_email(config: EmailConfig, timeout: float = SMTP_TIMEOUT) -> SendResult:
    """blocking smtplib 세션을 threadpool에서 실행."""
    logger.debug("connecting to %s:%s", config.smtp, config.port)
    return await run_in_threadpool(_send_via_smtp, config, timeout)


def describe_error(exc: BaseException) -> str:
    if isinstance(exc, SMTPResponseException):
        err = exc.smtp_error
        if isinstance(err, bytes):
            err = err.decode("utf-8", "replace")
        return f"{exc.smtp_code} {err}".strip()
    return str(exc) or exc.__class__.__name__
