"""
Validation Tests
"""

import pytest

from src.api.errors import ErrorCode
from src.api.validation import (
    is_email,
    is_mobile_phone,
    normalize_phone,
    validate_presence,
    validate_registration,
)


def _payload(**overrides):
    data = {
        "first_name": "A",
        "last_name": "B",
        "email": "a@b.com",
        "phone": "0600000000",
        "password": "secret",
    }
    data.update(overrides)
    return data


def test_normalize_phone_replaces_trunk_digit():
    assert normalize_phone("0600000000") == "+33600000000"


def test_mobile_phone_detection():
    assert is_mobile_phone("+33612345678")
    assert is_mobile_phone("+33756123456")
    # Paris landline
    assert not is_mobile_phone("+33142000000")
    assert not is_mobile_phone("+33123")
    assert not is_mobile_phone("not a phone")


def test_email_detection():
    assert is_email("a@b.com")
    assert not is_email("not-an-email")
    assert not is_email("a@")


@pytest.mark.parametrize("missing", ["first_name", "last_name", "email", "phone", "password"])
def test_missing_field_reports_only_missing_fields(missing):
    result = validate_registration(_payload(**{missing: None}))
    assert result.errors == [ErrorCode.missing_fields]


def test_empty_string_counts_as_missing():
    result = validate_registration(_payload(password=""))
    assert result.errors == [ErrorCode.missing_fields]


def test_missing_fields_skips_format_checks():
    result = validate_registration(_payload(email=None, phone="123", password="x"))
    assert result.errors == [ErrorCode.missing_fields]


def test_format_errors_accumulate():
    result = validate_registration(_payload(phone="0142000000", email="nope", password="123"))
    assert not result.ok
    assert result.errors == [
        ErrorCode.incorrect_phone_number,
        ErrorCode.incorrect_email_address,
        ErrorCode.password_too_short,
    ]


def test_password_length_boundary():
    assert validate_registration(_payload(password="12345")).errors == [ErrorCode.password_too_short]
    assert validate_registration(_payload(password="123456")).ok


def test_valid_payload_is_cleaned():
    result = validate_registration(_payload(email="Rider@Mail.COM"))
    assert result.ok
    assert result.cleaned["phone"] == "+33600000000"
    assert result.cleaned["email"] == "rider@mail.com"
    assert result.cleaned["password"] == "secret"
    assert result.cleaned["first_name"] == "A"


def test_validate_presence():
    assert validate_presence({"email": "a@b.com", "password": "x"}, ("email", "password")).ok
    result = validate_presence({"email": "a@b.com"}, ("email", "password"))
    assert result.errors == [ErrorCode.missing_fields]


@pytest.mark.parametrize("phone", ["0700000000", "0712345678", "0639000000", "0690000000"])
def test_every_06_and_07_number_is_accepted(phone):
    result = validate_registration(_payload(phone=phone))
    assert result.ok
    assert result.cleaned["phone"] == "+33" + phone[1:]


@pytest.mark.parametrize("phone", ["0800000000", "060000000", "06000000000"])
def test_non_mobile_shapes_are_rejected(phone):
    assert validate_registration(_payload(phone=phone)).errors == [ErrorCode.incorrect_phone_number]


def test_nul_byte_in_password_is_rejected():
    result = validate_registration(_payload(password="abc\x00defg"))
    assert result.errors == [ErrorCode.incorrect_password]
