from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RiderRegisterRequest(BaseModel):
    """
    Registration body.

    Fields are optional here so absent values surface as the `missing_fields`
    error code instead of a schema validation error.
    """
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, alias="firstName", description="Rider first name")
    last_name: Optional[str] = Field(default=None, alias="lastName", description="Rider last name")
    email: Optional[str] = Field(default=None, description="Unique email address")
    phone: Optional[str] = Field(default=None, description="Local French mobile number, e.g. 0612345678")
    password: Optional[str] = Field(default=None, description="Account password (min 6 chars)")


class RiderSessionRequest(BaseModel):
    email: Optional[str] = Field(default=None, description="Email address")
    password: Optional[str] = Field(default=None, description="Account password")


class RiderRef(BaseModel):
    id: UUID = Field(..., description="Rider id")


class RiderCreatedResponse(BaseModel):
    message: str = Field("rider_added", description="Outcome code")
    location: str = Field(..., description="Where the new rider signs in next")
    rider: RiderRef


class TokenResponse(BaseModel):
    message: str = Field("rider_authenticated", description="Outcome code")
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type (always 'bearer')")
    expires_at: datetime = Field(..., description="Token expiration timestamp (UTC)")


class RiderPublic(BaseModel):
    id: UUID = Field(..., description="Rider id")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: str = Field(..., description="Email address")
    phone: str = Field(..., description="Phone number in international format")
    created_at: datetime = Field(..., description="Account creation timestamp")


class ErrorResponse(BaseModel):
    errors: List[str] = Field(..., description="Machine-readable error codes")
