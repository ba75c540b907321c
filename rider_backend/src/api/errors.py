"""
Machine-readable error codes and the exceptions raised by the rider pipeline.

Error codes are what callers see in response bodies. Exceptions are internal:
RiderConflictError is handled by the service layer, CredentialHashingError is
fatal and propagates out of the request.
"""

import enum


class ErrorCode(str, enum.Enum):
    """Request-level error codes returned in the `errors` list."""
    missing_fields = "missing_fields"
    incorrect_phone_number = "incorrect_phone_number"
    incorrect_email_address = "incorrect_email_address"
    password_too_short = "password_too_short"
    incorrect_password = "incorrect_password"
    phone_number_already_taken = "phone_number_already_taken"
    email_address_already_taken = "email_address_already_taken"
    incorrect_credentials = "incorrect_credentials"


class CredentialHashingError(RuntimeError):
    """The password hashing primitive failed (e.g. malformed stored digest)."""


class RiderConflictError(Exception):
    """A unique constraint rejected a rider insert."""

    def __init__(self, field: str, code: ErrorCode):
        super().__init__(f"A rider with this {field} already exists.")
        self.field = field
        self.code = code
