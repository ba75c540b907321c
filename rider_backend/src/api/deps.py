"""
Shared FastAPI dependencies wiring the rider pipeline together.

Settings are injected rather than read from module globals, so tests override
`get_settings` and `get_db` through `app.dependency_overrides`.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from src.api.db import get_db
from src.api.security import CredentialHasher, TokenIssuer
from src.api.services.riders import RiderService
from src.api.settings import Settings, get_settings
from src.api.store import SqlAlchemyRiderStore


# PUBLIC_INTERFACE
def get_rider_store(db: Session = Depends(get_db)) -> SqlAlchemyRiderStore:
    """Return a rider store bound to the request's session."""
    return SqlAlchemyRiderStore(db)


# PUBLIC_INTERFACE
def get_token_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    """Return a token issuer configured from settings."""
    return TokenIssuer.from_settings(settings)


# PUBLIC_INTERFACE
def get_rider_service(
    store: SqlAlchemyRiderStore = Depends(get_rider_store),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> RiderService:
    """Return the registration/authentication service for one request."""
    return RiderService(store=store, hasher=CredentialHasher(), token_issuer=token_issuer)
