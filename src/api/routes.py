"""
Confirmation link route.

Confirmation messages embed links of the form <base>/confirm/<name>/<code>.
This router serves that path so following the link confirms the email.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_registry
from src.api.errors import to_http_exception
from src.api.models import ConfirmEmailResponse, ErrorResponse
from src.domain.exceptions import RegistryError
from src.domain.registry import UserRegistry

router = APIRouter(tags=["confirmation"])


@router.get(
    "/confirm/{name}/{code}",
    response_model=ConfirmEmailResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid confirmation code"},
        404: {"model": ErrorResponse, "description": "User does not exist"},
    },
    summary="Confirm an email by following the confirmation link",
)
def follow_confirmation_link(
    name: str,
    code: str,
    registry: UserRegistry = Depends(get_registry),
) -> ConfirmEmailResponse:
    try:
        registry.confirm_user_email(name, code)
    except RegistryError as exc:
        raise to_http_exception(exc) from None
    return ConfirmEmailResponse(message="Email confirmed", name=name)
