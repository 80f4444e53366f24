"""Room block API routes.

Ownership rule: anyone may read a block, only its property owner may change
it. Ownership checks live in the service layer so that the HTTP API and any
other caller share them.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomblock.api.deps import get_caller, get_db
from roomblock.api.errors import unwrap
from roomblock.database import BIG_INTEGER_MAX
from roomblock.schemas.common import Envelope
from roomblock.schemas.room_block import (
    RoomBlockCreated,
    RoomBlockListResponse,
    RoomBlockResponse,
    RoomBlockTerms,
    RoomsBookedUpdate,
)
from roomblock.services import room_block_service

router = APIRouter(prefix="/api/v1/room-blocks", tags=["room-blocks"])


@router.post(
    "",
    response_model=Envelope[RoomBlockCreated],
    status_code=status.HTTP_201_CREATED,
    summary="Create a room block",
)
async def create_room_block(
    body: RoomBlockTerms,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[RoomBlockCreated]:
    """Create a block for the caller's property. The property must be verified."""
    block_id = unwrap(
        await room_block_service.create(
            db,
            caller,
            body.event_name,
            body.start_date,
            body.end_date,
            body.total_rooms,
            body.price_per_room,
        )
    )
    return Envelope(value=RoomBlockCreated(id=block_id))


@router.get(
    "",
    response_model=Envelope[RoomBlockListResponse],
    summary="List the caller's room blocks",
)
async def list_room_blocks(
    active: bool | None = Query(None),
    skip: int = Query(0, ge=0, le=BIG_INTEGER_MAX),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[RoomBlockListResponse]:
    items, total = await room_block_service.list_for_owner(db, caller, active=active, skip=skip, limit=limit)
    return Envelope(
        value=RoomBlockListResponse(
            items=[RoomBlockResponse.model_validate(b) for b in items],
            total=total,
        )
    )


@router.get(
    "/{block_id}",
    response_model=Envelope[RoomBlockResponse],
    summary="Get a room block",
)
async def get_room_block(block_id: int, db: AsyncSession = Depends(get_db)) -> Envelope[RoomBlockResponse]:
    block = unwrap(await room_block_service.get(db, block_id))
    return Envelope(value=RoomBlockResponse.model_validate(block))


@router.put(
    "/{block_id}",
    response_model=Envelope[RoomBlockResponse],
    summary="Replace a room block's details",
)
async def update_room_block(
    block_id: int,
    body: RoomBlockTerms,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[RoomBlockResponse]:
    block = unwrap(
        await room_block_service.update(
            db,
            caller,
            block_id,
            body.event_name,
            body.start_date,
            body.end_date,
            body.total_rooms,
            body.price_per_room,
        )
    )
    return Envelope(value=RoomBlockResponse.model_validate(block))


@router.post(
    "/{block_id}/deactivate",
    response_model=Envelope[RoomBlockResponse],
    summary="Deactivate a room block",
)
async def deactivate_room_block(
    block_id: int,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[RoomBlockResponse]:
    block = unwrap(await room_block_service.deactivate(db, caller, block_id))
    return Envelope(value=RoomBlockResponse.model_validate(block))


@router.put(
    "/{block_id}/rooms-booked",
    response_model=Envelope[RoomBlockResponse],
    summary="Set the number of rooms booked",
)
async def update_rooms_booked(
    block_id: int,
    body: RoomsBookedUpdate,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[RoomBlockResponse]:
    block = unwrap(await room_block_service.update_rooms_booked(db, caller, block_id, body.rooms_booked))
    return Envelope(value=RoomBlockResponse.model_validate(block))
