"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """
    Documented shape of a registration submission.

    The register route validates the raw body itself so that failures
    return 400 with per-field messages; this model feeds the OpenAPI schema.
    """

    name: str = Field(..., min_length=2, description="Display name (min 2 characters)")
    email: str = Field(..., description="Email address, unique per account")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: str = Field(..., alias="userId")


class LoginRequest(BaseModel):
    """Request model for sign-in."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response model for successful sign-in."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: str = Field(..., alias="userId")


class MessageResponse(BaseModel):
    message: str


class DashboardResponse(BaseModel):
    """Protected dashboard payload for the signed-in identity."""

    message: str
    name: str | None
    email: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    fields: dict[str, str] | None = None
