from typing import List

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from src.api.deps import get_rider_service
from src.api.results import Err
from src.api.schemas.rider import (
    ErrorResponse,
    RiderCreatedResponse,
    RiderPublic,
    RiderRef,
    RiderRegisterRequest,
    RiderSessionRequest,
    TokenResponse,
)
from src.api.services.riders import RiderService

router = APIRouter(prefix="/riders", tags=["riders"])

SIGNIN_LOCATION = "/riders/session"


def _error_response(err: Err) -> JSONResponse:
    """Render a pipeline failure as an error-code list."""
    headers = {"WWW-Authenticate": "Bearer"} if err.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=err.status_code,
        content=ErrorResponse(errors=err.codes()).model_dump(),
        headers=headers,
    )


@router.post(
    "",
    response_model=RiderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Register a new rider",
    description="Validate rider details, enforce unique phone/email, and store a hashed credential.",
    operation_id="riders_register",
)
async def register_rider(
    payload: RiderRegisterRequest,
    response: Response,
    service: RiderService = Depends(get_rider_service),
):
    """
    Register a new rider.

    Errors:
    - 400 with one or more of: missing_fields, incorrect_phone_number,
      incorrect_email_address, password_too_short, incorrect_password,
      phone_number_already_taken, email_address_already_taken
    """
    result = await service.register(payload.model_dump())
    if isinstance(result, Err):
        return _error_response(result)

    response.headers["Location"] = SIGNIN_LOCATION
    return RiderCreatedResponse(location=SIGNIN_LOCATION, rider=RiderRef(id=result.value.id))


@router.post(
    "/session",
    response_model=TokenResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Authenticate a rider",
    description="Verify rider email/password and return a signed, time-limited access token.",
    operation_id="riders_authenticate",
)
async def authenticate_rider(
    payload: RiderSessionRequest,
    service: RiderService = Depends(get_rider_service),
):
    """
    Authenticate a rider and return a JWT access token.

    Errors:
    - 400 missing_fields
    - 401 incorrect_credentials
    """
    result = await service.authenticate(payload.model_dump())
    if isinstance(result, Err):
        return _error_response(result)

    token = result.value
    return TokenResponse(access_token=token.token, expires_at=token.expires_at)


@router.get(
    "",
    response_model=List[RiderPublic],
    summary="List riders",
    description=(
        "Return every registered rider. No pagination or filtering. "
        "Unlike the stored record, the response never includes the password hash."
    ),
    operation_id="riders_list",
)
async def list_riders(service: RiderService = Depends(get_rider_service)) -> List[RiderPublic]:
    """List all riders. Password hashes are never included."""
    riders = await service.list_riders()
    return [
        RiderPublic(
            id=r.id,
            first_name=r.first_name,
            last_name=r.last_name,
            email=r.email,
            phone=r.phone,
            created_at=r.created_at,
        )
        for r in riders
    ]
