"""
API v1 routes.

Defines REST endpoints for user registration and email confirmation.
Handlers are plain functions: the registry blocks on database and SMTP
I/O, so FastAPI runs them in its threadpool.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_registry
from src.api.errors import to_http_exception
from src.api.models import (
    ConfirmationStatusResponse,
    ConfirmEmailRequest,
    ConfirmEmailResponse,
    CreateUserRequest,
    CreateUserResponse,
    ErrorResponse,
    ResendCodeResponse,
    UserEmailResponse,
    UserExistsResponse,
)
from src.domain.exceptions import RegistryError
from src.domain.registry import UserRegistry
from src.domain.user import User

router = APIRouter(tags=["v1"])

_UNAVAILABLE = {503: {"model": ErrorResponse, "description": "Persistence unavailable"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "User does not exist"}}


@router.post(
    "/users",
    response_model=CreateUserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "User already exists"},
        422: {"description": "Validation error"},
        502: {"model": ErrorResponse, "description": "Confirmation message not sent"},
        **_UNAVAILABLE,
    },
    summary="Register a new user",
    description="Register a user name and email address. "
    "A confirmation link is sent to the provided email.",
)
def create_user(
    request_data: CreateUserRequest,
    registry: UserRegistry = Depends(get_registry),
) -> CreateUserResponse:
    """
    Register a new user and send the confirmation link.

    - **name**: Unique user name
    - **email**: Address the confirmation link is sent to
    """
    try:
        user = User.create(request_data.name, request_data.email)
        registry.create_user(user)
    except RegistryError as exc:
        raise to_http_exception(exc) from None
    return CreateUserResponse(message="Confirmation message sent", name=user.name)


@router.get(
    "/users/{name}",
    response_model=UserExistsResponse,
    responses=_UNAVAILABLE,
    summary="Check whether a user exists",
)
def user_exists(
    name: str,
    registry: UserRegistry = Depends(get_registry),
) -> UserExistsResponse:
    try:
        exists = registry.user_exists(name)
    except RegistryError as exc:
        raise to_http_exception(exc) from None
    return UserExistsResponse(name=name, exists=exists)


@router.post(
    "/users/{name}/confirmation",
    response_model=ConfirmEmailResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid confirmation code"},
        **_NOT_FOUND,
        **_UNAVAILABLE,
    },
    summary="Confirm a user's email with the confirmation code",
)
def confirm_user_email(
    name: str,
    request_data: ConfirmEmailRequest,
    registry: UserRegistry = Depends(get_registry),
) -> ConfirmEmailResponse:
    try:
        registry.confirm_user_email(name, request_data.code)
    except RegistryError as exc:
        raise to_http_exception(exc) from None
    return ConfirmEmailResponse(message="Email confirmed", name=name)


@router.get(
    "/users/{name}/confirmation",
    response_model=ConfirmationStatusResponse,
    responses={**_NOT_FOUND, **_UNAVAILABLE},
    summary="Get the confirmation state of a user's email",
)
def user_email_is_confirmed(
    name: str,
    registry: UserRegistry = Depends(get_registry),
) -> ConfirmationStatusResponse:
    try:
        confirmed = registry.user_email_is_confirmed(name)
    except RegistryError as exc:
        raise to_http_exception(exc) from None
    return ConfirmationStatusResponse(name=name, confirmed=confirmed)


@router.post(
    "/users/{name}/confirmation-code",
    response_model=ResendCodeResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        409: {"model": ErrorResponse, "description": "Email already confirmed"},
        502: {"model": ErrorResponse, "description": "Confirmation message not sent"},
        **_NOT_FOUND,
        **_UNAVAILABLE,
    },
    summary="Send a new confirmation code",
    description="Issue a new confirmation code, invalidating the previous one, "
    "and send a fresh confirmation link.",
)
def resend_confirmation_code(
    name: str,
    registry: UserRegistry = Depends(get_registry),
) -> ResendCodeResponse:
    try:
        registry.resend_confirmation_code(name)
    except RegistryError as exc:
        raise to_http_exception(exc) from None
    return ResendCodeResponse(message="Confirmation message sent", name=name)


@router.get(
    "/users/{name}/email",
    response_model=UserEmailResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Email not confirmed"},
        **_NOT_FOUND,
        **_UNAVAILABLE,
    },
    summary="Get a user's confirmed email",
)
def get_user_email(
    name: str,
    registry: UserRegistry = Depends(get_registry),
) -> UserEmailResponse:
    """Only confirmed addresses are returned."""
    try:
        email = registry.get_user_email(name)
    except RegistryError as exc:
        raise to_http_exception(exc) from None
    return UserEmailResponse(name=name, email=email)
