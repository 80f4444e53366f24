"""Pydantic v2 request/response schemas for attrition policy endpoints."""

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AttritionPolicyTerms(BaseModel):
    """Policy terms. Range checks happen in the service so that errors carry stable codes."""

    min_pickup_percentage: int
    penalty_percentage: int
    grace_period_days: int


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AttritionPolicyResponse(BaseModel):
    block_id: int
    min_pickup_percentage: int
    penalty_percentage: int
    grace_period_days: int
    created_at: int | None = None
    updated_at: int | None = None

    model_config = ConfigDict(from_attributes=True)


class AttritionAssessmentResponse(BaseModel):
    """Penalty breakdown. ``status`` is ``pending`` until the grace period has elapsed."""

    block_id: int
    pickup_percentage: int
    required_rooms: int
    shortfall_rooms: int
    penalty: int
    status: str
    assessable_at: int

    model_config = ConfigDict(from_attributes=True)
