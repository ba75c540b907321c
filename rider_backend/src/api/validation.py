"""
Pure input checks for rider registration and authentication.

Nothing here performs I/O. Presence failures short-circuit format checks;
format checks (phone, email, password length) all run and accumulate.

Phone numbers are assumed to follow the French numbering plan: the leading
trunk digit of a local number is replaced with the +33 calling code. Other
regions are not supported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping

import phonenumbers
from email_validator import EmailNotValidError, validate_email

from src.api.errors import ErrorCode

PHONE_REGION = "FR"
PHONE_COUNTRY_PREFIX = "+33"
MIN_PASSWORD_LENGTH = 6

REGISTRATION_FIELDS = ("first_name", "last_name", "email", "phone", "password")
AUTHENTICATION_FIELDS = ("email", "password")

PHONE_COUNTRY_CODE = 33
MOBILE_LEADING_DIGITS = ("6", "7")
MOBILE_NATIONAL_LENGTH = 9


@dataclass
class ValidationResult:
    errors: List[ErrorCode] = field(default_factory=list)
    cleaned: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value == ""


# PUBLIC_INTERFACE
def validate_presence(data: Mapping[str, Any], required_fields: Iterable[str]) -> ValidationResult:
    """Check that every required field holds a non-empty string."""
    required = tuple(required_fields)
    if any(_is_blank(data.get(name)) for name in required):
        return ValidationResult(errors=[ErrorCode.missing_fields])
    return ValidationResult(cleaned={name: data[name] for name in required})


def normalize_phone(phone: str) -> str:
    """Rewrite a local French number (0XXXXXXXXX) to international form (+33XXXXXXXXX)."""
    return f"{PHONE_COUNTRY_PREFIX}{phone[1:]}"


def _parse_mobile(phone: str) -> phonenumbers.PhoneNumber | None:
    try:
        number = phonenumbers.parse(phone, PHONE_REGION)
    except phonenumbers.NumberParseException:
        return None
    if number.country_code != PHONE_COUNTRY_CODE or not phonenumbers.is_possible_number(number):
        return None
    national = phonenumbers.national_significant_number(number)
    if len(national) != MOBILE_NATIONAL_LENGTH or not national.startswith(MOBILE_LEADING_DIGITS):
        return None
    return number


def is_mobile_phone(phone: str) -> bool:
    """Return True if phone has French mobile syntax (+33 followed by 6 or 7 and eight digits)."""
    return _parse_mobile(phone) is not None


def has_forbidden_characters(password: str) -> bool:
    """bcrypt cannot hash NUL bytes."""
    return "\x00" in password


def is_email(email: str) -> bool:
    """Syntax-only email check; no DNS lookups."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


# PUBLIC_INTERFACE
def validate_registration(data: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a registration payload.

    Returns:
        ValidationResult whose `cleaned` mapping holds the phone in E.164 form
        and the email lower-cased when no errors were found.
    """
    presence = validate_presence(data, REGISTRATION_FIELDS)
    if not presence.ok:
        return presence

    cleaned = dict(presence.cleaned)
    errors: List[ErrorCode] = []

    number = _parse_mobile(normalize_phone(cleaned["phone"]))
    if number is None:
        errors.append(ErrorCode.incorrect_phone_number)
    else:
        cleaned["phone"] = phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164)

    if not is_email(cleaned["email"]):
        errors.append(ErrorCode.incorrect_email_address)
    else:
        cleaned["email"] = cleaned["email"].strip().lower()

    if len(cleaned["password"]) < MIN_PASSWORD_LENGTH:
        errors.append(ErrorCode.password_too_short)
    if has_forbidden_characters(cleaned["password"]):
        errors.append(ErrorCode.incorrect_password)

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(cleaned=cleaned)
