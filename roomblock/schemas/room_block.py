"""Pydantic v2 request/response schemas for room block endpoints."""

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RoomBlockTerms(BaseModel):
    """Full set of block details, used for both creation and replacement.

    Date ordering and room totals are checked by the service so that the
    caller gets the stable INVALID_DATES / INVALID_QUANTITY codes.
    """

    event_name: str = Field(..., min_length=1, max_length=255)
    start_date: int = Field(..., ge=0, description="Seconds since epoch")
    end_date: int = Field(..., ge=0, description="Seconds since epoch")
    total_rooms: int
    price_per_room: int = Field(..., description="Smallest currency unit")


class RoomsBookedUpdate(BaseModel):
    rooms_booked: int


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RoomBlockResponse(BaseModel):
    """Room block as stored."""

    id: int
    property_owner: str
    event_name: str
    start_date: int
    end_date: int
    total_rooms: int
    price_per_room: int
    rooms_booked: int
    active: bool

    model_config = ConfigDict(from_attributes=True)


class RoomBlockCreated(BaseModel):
    id: int


class RoomBlockListResponse(BaseModel):
    """Paginated list of room blocks."""

    items: list[RoomBlockResponse]
    total: int
