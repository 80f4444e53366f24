"""Pydantic v2 request/response schemas for property registry endpoints."""

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PropertyRegister(BaseModel):
    """Schema for registering the caller's property."""

    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)


class AdminTransfer(BaseModel):
    """Schema for handing the registry admin role to another identity."""

    new_admin: str = Field(..., min_length=1, max_length=128)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PropertyResponse(BaseModel):
    """Property details, including verification state."""

    owner: str
    name: str
    location: str
    verified: bool
    verification_date: int | None = None

    model_config = ConfigDict(from_attributes=True)


class VerificationStatus(BaseModel):
    owner: str
    verified: bool


class AdminResponse(BaseModel):
    admin: str
