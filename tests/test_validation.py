import math
import pytest

from services.email.validation import (
    EMAIL_APPROVED_REQUIRED,
    WEBHOOK_REQUIRED,
    is_missing,
    validate_required_fields,
)


def _full_body():
    return {
        "origin": "me@example.com",
        "pass": "secret",
        "smtp": "smtp.example.com",
        "port": "587",
        "dest": "you@example.com",
        "subject": "Hi",
        "body": "Hello",
    }


def test_complete_body_is_valid():
    result = validate_required_fields(_full_body(), WEBHOOK_REQUIRED)
    assert result.valid is True
    assert result.missing == []


def test_missing_keys_reported_in_required_order():
    body = _full_body()
    del body["subject"]
    del body["origin"]
    body["smtp"] = ""

    result = validate_required_fields(body, WEBHOOK_REQUIRED)

    assert result.valid is False
    assert result.missing == ["origin", "smtp", "subject"]


def test_empty_body_reports_everything():
    result = validate_required_fields({}, EMAIL_APPROVED_REQUIRED)
    assert result.missing == list(EMAIL_APPROVED_REQUIRED)


def test_template_fields_are_not_checked_by_generic_list():
    body = _full_body()
    result = validate_required_fields(body, EMAIL_APPROVED_REQUIRED)
    assert result.missing == ["req_email", "user_pass"]


@pytest.mark.parametrize("value", [None, False, "", 0, 0.0, math.nan])
def test_falsy_values_count_as_missing(value):
    assert is_missing(value) is True


@pytest.mark.parametrize("value", ["x", "0", 465, -1, True, [], {}])
def test_truthy_values_count_as_present(value):
    assert is_missing(value) is False
