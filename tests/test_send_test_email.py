import importlib.util
from pathlib import Path
from unittest.mock import patch

from services.email.schemas import WebhookResponse

_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "send_test_email.py"
_script_loader = importlib.util.spec_from_file_location("send_test_email", _SCRIPT)
send_test_email = importlib.util.module_from_spec(_script_loader)
_script_loader.loader.exec_module(send_test_email)

BASE_ARGS = [
    "--origin", "me@example.com", "--password", "secret",
    "--smtp", "smtp.example.com", "--dest", "you@example.com",
]


def test_generic_send_exit_code():
    ok = WebhookResponse(ok=True, status_code=200, message_id="<id@example.com>")
    with patch.object(send_test_email, "send_email", return_value=ok) as mock_send:
        assert send_test_email.main(BASE_ARGS + ["--port", "465"]) == 0
    args, kwargs = mock_send.call_args
    assert args[3] == "465"
    assert kwargs["subject"] == "SMTP Webhook test"


def test_failed_send_returns_one():
    failed = WebhookResponse(ok=False, status_code=400, missing=["subject"])
    with patch.object(send_test_email, "send_email", return_value=failed):
        assert send_test_email.main(BASE_ARGS) == 1


def test_approved_requires_template_fields():
    with patch.object(send_test_email, "send_email_approved") as mock_send:
        assert send_test_email.main(BASE_ARGS + ["--approved"]) == 2
    mock_send.assert_not_called()


def test_approved_send():
    ok = WebhookResponse(ok=True, status_code=200, message_id="<id@example.com>")
    with patch.object(send_test_email, "send_email_approved", return_value=ok) as mock_send:
        code = send_test_email.main(
            BASE_ARGS + ["--approved", "--req-email", "a@b.com", "--user-pass", "p@ss1"]
        )
    assert code == 0
    assert mock_send.call_args.kwargs["req_email"] == "a@b.com"


def test_approved_send_passes_webhook_url():
    ok = WebhookResponse(ok=True, status_code=200)
    with patch.object(send_test_email, "send_email_approved", return_value=ok) as mock_send:
        send_test_email.main(
            BASE_ARGS + ["--url", "http://svc/webhook", "--approved",
                         "--req-email", "a@b.com", "--user-pass", "p@ss1"]
        )
    assert mock_send.call_args.kwargs["url"] == "http://svc/webhook"
