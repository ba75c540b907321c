"""
Pytest configuration for rider backend tests
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from src.api.db import build_engine, get_db, init_db
from src.api.errors import RiderConflictError
from src.api.main import app
from src.api.security import CredentialHasher, TokenIssuer, pwd_context
from src.api.services.riders import RiderService
from src.api.settings import Settings, get_settings
from src.api.store import NewRider, RiderCredentials, RiderRecord

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
TEST_SECRET = "test-secret-key"


class RecordingRiderStore:
    """In-memory RiderStore that records every call for ordering assertions."""

    def __init__(self):
        self.riders = []
        self.calls = []
        self.conflict_on_create = None

    def seed(self, **fields) -> RiderRecord:
        record = RiderRecord(
            id=fields.pop("id", uuid.uuid4()),
            created_at=fields.pop("created_at", datetime.now(timezone.utc)),
            **fields,
        )
        self.riders.append(record)
        return record

    async def exists(self, field, value):
        self.calls.append(("exists", field))
        return any(getattr(r, field) == value for r in self.riders)

    async def create(self, new_rider: NewRider) -> RiderRecord:
        self.calls.append(("create", new_rider.email))
        if self.conflict_on_create is not None:
            raise self.conflict_on_create
        return self.seed(
            first_name=new_rider.first_name,
            last_name=new_rider.last_name,
            email=new_rider.email,
            phone=new_rider.phone,
            password_hash=new_rider.password_hash,
        )

    async def find_credentials_by_email(self, email):
        self.calls.append(("find_credentials_by_email", email))
        for r in self.riders:
            if r.email == email:
                return RiderCredentials(id=r.id, password_hash=r.password_hash)
        return None

    async def list_all(self):
        self.calls.append(("list_all",))
        return list(self.riders)

    def raise_conflict(self, field, code):
        self.conflict_on_create = RiderConflictError(field, code)


class CountingHasher(CredentialHasher):
    """CredentialHasher that counts how often each primitive runs."""

    def __init__(self):
        super().__init__()
        self.hash_calls = 0
        self.verify_calls = 0
        self.dummy_calls = 0

    async def hash(self, plaintext):
        self.hash_calls += 1
        return await super().hash(plaintext)

    async def verify(self, plaintext, digest):
        self.verify_calls += 1
        return await super().verify(plaintext, digest)

    async def dummy_verify(self):
        self.dummy_calls += 1
        await super().dummy_verify()


@pytest.fixture(scope="session")
def secret_hash():
    """bcrypt hash of 'secret', computed once."""
    return pwd_context.hash("secret")


@pytest.fixture
def settings():
    return Settings(
        database_url=TEST_DATABASE_URL,
        jwt_secret_key=TEST_SECRET,
        access_token_expire_minutes=30,
    )


@pytest.fixture
def store():
    return RecordingRiderStore()


@pytest.fixture
def hasher():
    return CountingHasher()


@pytest.fixture
def token_issuer(settings):
    return TokenIssuer.from_settings(settings)


@pytest.fixture
def service(store, hasher, token_issuer):
    return RiderService(store=store, hasher=hasher, token_issuer=token_issuer)


@pytest.fixture
def engine():
    engine = build_engine(TEST_DATABASE_URL)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory, settings):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
