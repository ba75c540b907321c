"""
Rider registration and authentication pipelines.

Each stage returns Ok or Err and the pipeline returns on the first Err, so a
failed stage never triggers a later one (no hash after a uniqueness failure,
no store write after a hash failure).
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from src.api.errors import ErrorCode, RiderConflictError
from src.api.results import Err, Ok, Result
from src.api.security import AccessToken, CredentialHasher, TokenIssuer
from src.api.services.uniqueness import UniquenessChecker
from src.api.store import NewRider, RiderRecord, RiderStore
from src.api.validation import (
    AUTHENTICATION_FIELDS,
    has_forbidden_characters,
    validate_presence,
    validate_registration,
)

logger = logging.getLogger(__name__)


class RiderService:
    def __init__(self, store: RiderStore, hasher: CredentialHasher, token_issuer: TokenIssuer):
        self.store = store
        self.hasher = hasher
        self.token_issuer = token_issuer
        self.uniqueness = UniquenessChecker(store)

    # PUBLIC_INTERFACE
    async def register(self, data: Mapping[str, Any]) -> Result[RiderRecord]:
        """
        Register a rider.

        Stages: validate -> phone/email uniqueness -> hash password -> create.

        Errors (status 400):
        - missing_fields
        - incorrect_phone_number / incorrect_email_address / password_too_short
          / incorrect_password
        - phone_number_already_taken / email_address_already_taken
        """
        logger.info("Registering a rider")

        validation = validate_registration(data)
        if not validation.ok:
            logger.info("Registration rejected: %s", ", ".join(code.value for code in validation.errors))
            return Err.of(400, validation.errors)
        fields = validation.cleaned

        availability = await self.uniqueness.check(fields["phone"], fields["email"])
        if isinstance(availability, Err):
            return availability

        password_hash = await self.hasher.hash(fields["password"])

        try:
            rider = await self.store.create(
                NewRider(
                    first_name=fields["first_name"],
                    last_name=fields["last_name"],
                    email=fields["email"],
                    phone=fields["phone"],
                    password_hash=password_hash,
                )
            )
        except RiderConflictError as exc:
            return Err.of(400, [exc.code])

        logger.info("Rider %s registered", rider.id)
        return Ok(rider)

    # PUBLIC_INTERFACE
    async def authenticate(self, data: Mapping[str, Any]) -> Result[AccessToken]:
        """
        Authenticate a rider by email/password and issue an access token.

        Errors:
        - 400 missing_fields
        - 401 incorrect_credentials (unknown email and wrong password alike)
        """
        logger.info("Authenticating a rider")

        presence = validate_presence(data, AUTHENTICATION_FIELDS)
        if not presence.ok:
            return Err.of(400, presence.errors)

        if has_forbidden_characters(presence.cleaned["password"]):
            return self._incorrect_credentials()

        credentials = await self.store.find_credentials_by_email(presence.cleaned["email"])
        if credentials is None:
            await self.hasher.dummy_verify()
            return self._incorrect_credentials()

        if not await self.hasher.verify(presence.cleaned["password"], credentials.password_hash):
            return self._incorrect_credentials()

        token = self.token_issuer.issue(credentials.id)
        logger.info("Rider %s authenticated", credentials.id)
        return Ok(token)

    async def list_riders(self) -> List[RiderRecord]:
        return await self.store.list_all()

    @staticmethod
    def _incorrect_credentials() -> Err:
        logger.info("Authentication rejected: incorrect credentials")
        return Err.of(401, [ErrorCode.incorrect_credentials])
