from services.email.templates import (
    APPROVED_SUBJECT,
    TEMPLATE_NAME,
    render_email_approved,
)


def test_text_body_matches_fixed_template():
    rendered = render_email_approved("a@b.com", "p@ss1")
    assert rendered.text == (
        "Your Email Request was Approved:\n\n"
        "Your Email is a@b.com\n"
        "Your Password is p@ss1\n\n"
        "Login at mail.bing-bong.uk"
    )


def test_html_body_contains_values_and_link():
    rendered = render_email_approved("a@b.com", "p@ss1")
    assert "<strong>a@b.com</strong>" in rendered.html
    assert "<strong>p@ss1</strong>" in rendered.html
    assert '<a href="https://mail.bing-bong.uk">' in rendered.html


def test_subject_and_name_are_fixed():
    rendered = render_email_approved("a@b.com", "p@ss1")
    assert rendered.subject == APPROVED_SUBJECT == "Email Request Approved"
    assert TEMPLATE_NAME == "email-approved"


def test_html_values_are_escaped():
    rendered = render_email_approved("a@b.com", "<b>&x")
    assert "<strong>&lt;b&gt;&amp;x</strong>" in rendered.html
    # 텍스트 본문은 그대로
    assert "Your Password is <b>&x\n" in rendered.text
