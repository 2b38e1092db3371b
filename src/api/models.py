"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field


class CreateUserRequest(BaseModel):
    """Request model for user registration."""

    name: str = Field(..., min_length=1, max_length=64, description="Unique user name")
    email: EmailStr


class CreateUserResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    name: str


class UserExistsResponse(BaseModel):
    """Response model for the existence check."""

    name: str
    exists: bool


class ConfirmEmailRequest(BaseModel):
    """Request model for email confirmation."""

    code: str = Field(..., min_length=1, max_length=128, description="Confirmation code")


class ConfirmEmailResponse(BaseModel):
    """Response model for successful confirmation."""

    message: str
    name: str


class ConfirmationStatusResponse(BaseModel):
    """Response model for the confirmation state of a user's email."""

    name: str
    confirmed: bool


class ResendCodeResponse(BaseModel):
    """Response model for a re-issued confirmation code."""

    message: str
    name: str


class UserEmailResponse(BaseModel):
    """Response model for a confirmed email address."""

    name: str
    email: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
