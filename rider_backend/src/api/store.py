"""
Rider persistence.

The pipeline only talks to the RiderStore protocol. SqlAlchemyRiderStore is the
production implementation; its blocking Session calls run in the thread pool so
awaiting them never stalls the event loop.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Literal, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from src.api.errors import ErrorCode, RiderConflictError
from src.api.models.rider import Rider

logger = logging.getLogger(__name__)

UniqueField = Literal["phone", "email"]


@dataclass(frozen=True)
class NewRider:
    """Rider fields supplied at registration; id and created_at are assigned by the store."""
    first_name: str
    last_name: str
    email: str
    phone: str
    password_hash: str


@dataclass(frozen=True)
class RiderRecord:
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class RiderCredentials:
    id: uuid.UUID
    password_hash: str


class RiderStore(Protocol):
    async def exists(self, field: UniqueField, value: str) -> bool: ...

    async def create(self, new_rider: NewRider) -> RiderRecord: ...

    async def find_credentials_by_email(self, email: str) -> Optional[RiderCredentials]: ...

    async def list_all(self) -> List[RiderRecord]: ...


def _utcnow() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(timezone.utc)


def _normalize(field: UniqueField, value: str) -> str:
    return value.strip().lower() if field == "email" else value


def _to_record(row: Rider) -> RiderRecord:
    """Convert ORM Rider row to a detached record."""
    return RiderRecord(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        phone=row.phone,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


_CONFLICT_CODES = {
    "phone": ErrorCode.phone_number_already_taken,
    "email": ErrorCode.email_address_already_taken,
}


class SqlAlchemyRiderStore:
    """RiderStore backed by the 'riders' table."""

    def __init__(self, db: Session):
        self.db = db

    async def exists(self, field: UniqueField, value: str) -> bool:
        return await run_in_threadpool(self._exists, field, value)

    async def create(self, new_rider: NewRider) -> RiderRecord:
        return await run_in_threadpool(self._create, new_rider)

    async def find_credentials_by_email(self, email: str) -> Optional[RiderCredentials]:
        return await run_in_threadpool(self._find_credentials_by_email, email)

    async def list_all(self) -> List[RiderRecord]:
        return await run_in_threadpool(self._list_all)

    def _exists(self, field: UniqueField, value: str) -> bool:
        if field not in _CONFLICT_CODES:
            raise ValueError(f"Unknown unique field: {field}")
        column = getattr(Rider, field)
        found = self.db.scalar(select(Rider.id).where(column == _normalize(field, value)).limit(1))
        return found is not None

    def _create(self, new_rider: NewRider) -> RiderRecord:
        row = Rider(
            id=uuid.uuid4(),
            first_name=new_rider.first_name,
            last_name=new_rider.last_name,
            email=_normalize("email", new_rider.email),
            phone=new_rider.phone,
            password_hash=new_rider.password_hash,
            created_at=_utcnow(),
        )
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # The constraint name is backend specific; ask the table which value collided.
            field: UniqueField = "phone" if self._exists("phone", new_rider.phone) else "email"
            logger.warning("Rider insert rejected by unique constraint on %s", field)
            raise RiderConflictError(field, _CONFLICT_CODES[field])
        self.db.refresh(row)
        return _to_record(row)

    def _find_credentials_by_email(self, email: str) -> Optional[RiderCredentials]:
        row = self.db.execute(
            select(Rider.id, Rider.password_hash).where(Rider.email == _normalize("email", email))
        ).first()
        if row is None:
            return None
        return RiderCredentials(id=row.id, password_hash=row.password_hash)

    def _list_all(self) -> List[RiderRecord]:
        rows = self.db.scalars(select(Rider).order_by(Rider.created_at)).all()
        return [_to_record(row) for row in rows]
