# services/email/templates.py

"""
templates.py
------------
'email-approved' 고정 템플릿 (제목·텍스트·HTML).
"""

from __future__ import annotations
from dataclasses import dataclass
from html import escape

TEMPLATE_NAME = "email-approved"
LOGIN_HOST = "mail.bing-bong.uk"

APPROVED_SUBJECT = "Email Request Approved"

APPROVED_TEXT = (
    "Your Email Request was Approved:\n\n"
    "Your Email is {req_email}\n"
    "Your Password is {user_pass}\n\n"
    "Login at {login_host}"
)

APPROVED_HTML = """\
<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <h2>Your Email Request was Approved</h2>
    <p>Your Email is <strong>{req_email}</strong></p>
    <p>Your Password is <strong>{user_pass}</strong></p>
    <p>Login at <a href="https://{login_host}">{login_host}</a></p>
  </body>
</html>
"""


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    text: str
    html: str


def render_email_approved(req_email: str, user_pass: str) -> RenderedEmail:
    text = APPROVED_TEXT.format(
        req_email=req_email, user_pass=user_pass, login_host=LOGIN_HOST
    )
    # HTML 쪽만 escape (<, >, &)
    html = APPROVED_HTML.format(
        req_email=escape(str(req_email), quote=False),
        user_pass=escape(str(user_pass), quote=False),
        login_host=LOGIN_HOST,
    )
    return RenderedEmail(subject=APPROVED_SUBJECT, text=text, html=html)
