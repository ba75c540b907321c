import logging

from src.api.errors import ErrorCode
from src.api.results import Err, Ok, Result
from src.api.store import RiderStore, UniqueField

logger = logging.getLogger(__name__)


class UniquenessChecker:
    """
    Ordered phone-then-email collision checks against the rider store.

    Each check is one independent query. Nothing spans both, so a concurrent
    registration can still win the race; the store's unique constraints catch
    that case at insert time.
    """

    def __init__(self, store: RiderStore):
        self.store = store

    async def exists(self, field: UniqueField, value: str) -> bool:
        return await self.store.exists(field, value)

    async def check(self, phone: str, email: str) -> Result[None]:
        """Return Err on the first taken value; email is not queried when phone is taken."""
        if await self.exists("phone", phone):
            logger.info("Registration rejected: phone number already taken")
            return Err.of(400, [ErrorCode.phone_number_already_taken])
        if await self.exists("email", email):
            logger.info("Registration rejected: email address already taken")
            return Err.of(400, [ErrorCode.email_address_already_taken])
        return Ok(None)
