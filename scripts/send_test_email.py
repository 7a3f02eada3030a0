# send_test_email.py

"""
send_test_email.py
------------------
실행 중인 웹훅 서버로 테스트 메일 발송 요청을 보내는 스크립트.
python scripts/send_test_email.py --origin me@example.com --password ... --smtp smtp.example.com --dest you@example.com
"""

from pathlib import Path
import argparse, sys, logging
sys.path.append(str(Path(__file__).resolve().parents[1]))

from services.email.adapter import send_email, send_email_approved
from config import WEBHOOK_URL

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s"
)

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="send_test_email")
    p.add_argument("--url", default=None, help=f"웹훅 URL (기본 {WEBHOOK_URL})")
    p.add_argument("--origin", required=True)
    p.add_argument("--password", required=True)
    p.add_argument("--smtp", required=True)
    p.add_argument("--port", default="587")
    p.add_argument("--dest", required=True)
    p.add_argument("--subject", default="SMTP Webhook test")
    p.add_argument("--body", default="This is a test message sent through the SMTP webhook.")
    p.add_argument("--html", default=None)
    p.add_argument("--approved", action="store_true", help="email-approved 템플릿 엔드포인트 사용")
    p.add_argument("--req-email", default=None)
    p.add_argument("--user-pass", default=None)
    return p

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.approved:
        if not (args.req_email and args.user_pass):
            logging.error("--approved requires --req-email and --user-pass")
            return 2
        resp = send_email_approved(
            args.origin, args.password, args.smtp, args.port, args.dest,
            req_email=args.req_email, user_pass=args.user_pass, url=args.url,
        )
    else:
        resp = send_email(
            args.origin, args.password, args.smtp, args.port, args.dest,
            subject=args.subject, body=args.body, html=args.html, url=args.url,
        )

    logging.info("status=%s ok=%s message_id=%s detail=%s",
                 resp.status_code, resp.ok, resp.message_id, resp.detail)
    if resp.missing:
        logging.info("missing=%s", resp.missing)
    return 0 if resp.ok else 1


if __name__ == "__main__":
    sys.exit(main())
