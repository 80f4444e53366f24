"""Room block store — lifecycle of event room blocks, scoped to their owner."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roomblock.config import settings
from roomblock.database import BIG_INTEGER_MAX, INTEGER_MAX
from roomblock.domain.authorization import is_owner
from roomblock.domain.clock import utc_timestamp
from roomblock.domain.errors import ErrorCode, Result
from roomblock.models.property import Property
from roomblock.models.room_block import RoomBlock

logger = logging.getLogger(__name__)


def _reject(code: ErrorCode, message: str, *args: object) -> Result:
    logger.warning("%s: " + message, code.value, *args)
    return Result.fail(code)


def _check_terms(start_date: int, end_date: int, total_rooms: int, price_per_room: int) -> ErrorCode | None:
    """First violated rule for a block's dates, size and price, or ``None``."""
    if start_date < 0 or start_date >= end_date or end_date > BIG_INTEGER_MAX:
        return ErrorCode.INVALID_DATES
    if not 0 < total_rooms <= INTEGER_MAX or not 0 <= price_per_room <= BIG_INTEGER_MAX:
        return ErrorCode.INVALID_QUANTITY
    return None


async def _load_block(db: AsyncSession, block_id: int, *, for_update: bool = False) -> RoomBlock | None:
    if not 0 < block_id <= INTEGER_MAX:
        return None
    query = select(RoomBlock).where(RoomBlock.id == block_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def lock_owned_block(db: AsyncSession, caller: str, block_id: int) -> Result[RoomBlock]:
    """Lock the block and check that ``caller`` owns it."""
    block = await _load_block(db, block_id, for_update=True)
    if block is None:
        return _reject(ErrorCode.NOT_FOUND, "room block %s does not exist", block_id)
    if not is_owner(caller, block.property_owner):
        return _reject(ErrorCode.UNAUTHORIZED, "%s does not own room block %s", caller, block_id)
    return Result.ok(block)


async def create(
    db: AsyncSession,
    caller: str,
    event_name: str,
    start_date: int,
    end_date: int,
    total_rooms: int,
    price_per_room: int,
) -> Result[int]:
    """Create a block for the caller's verified property and return its id.

    The property row stays locked until the request commits, so a concurrent
    revoke cannot slip between the verification check and the insert.
    """
    prop_result = await db.execute(select(Property).where(Property.owner == caller).with_for_update())
    prop = prop_result.scalar_one_or_none()
    if prop is None or not prop.verified:
        return _reject(ErrorCode.NOT_VERIFIED, "%s has no verified property", caller)

    error = _check_terms(start_date, end_date, total_rooms, price_per_room)
    if error is not None:
        return _reject(error, "rejected new block for %s", caller)

    now = utc_timestamp()
    block = RoomBlock(
        property_owner=caller,
        event_name=event_name,
        start_date=start_date,
        end_date=end_date,
        total_rooms=total_rooms,
        price_per_room=price_per_room,
        rooms_booked=0,
        active=True,
        created_at=now,
        updated_at=now,
    )
    db.add(block)
    await db.flush()
    logger.info("Created room block %s (%r, %d rooms) for %s", block.id, event_name, total_rooms, caller)
    return Result.ok(block.id)


async def update(
    db: AsyncSession,
    caller: str,
    block_id: int,
    event_name: str,
    start_date: int,
    end_date: int,
    total_rooms: int,
    price_per_room: int,
) -> Result[RoomBlock]:
    """Replace a block's event details. Every field is supplied on each call.

    Inactive blocks may still be edited. The new ``total_rooms`` must still
    cover the rooms already booked.
    """
    loaded = await lock_owned_block(db, caller, block_id)
    if not loaded.success:
        return loaded
    block = loaded.value

    error = _check_terms(start_date, end_date, total_rooms, price_per_room)
    if error is not None:
        return _reject(error, "rejected update of room block %s", block_id)
    if block.rooms_booked > total_rooms:
        return _reject(
            ErrorCode.INVALID_QUANTITY,
            "room block %s already has %d rooms booked, more than %d",
            block_id,
            block.rooms_booked,
            total_rooms,
        )

    block.event_name = event_name
    block.start_date = start_date
    block.end_date = end_date
    block.total_rooms = total_rooms
    block.price_per_room = price_per_room
    block.updated_at = utc_timestamp()
    await db.flush()
    logger.info("Updated room block %s", block_id)
    return Result.ok(block)


async def deactivate(db: AsyncSession, caller: str, block_id: int) -> Result[RoomBlock]:
    """Deactivate a block for good. Deactivating an inactive block succeeds without change."""
    loaded = await lock_owned_block(db, caller, block_id)
    if not loaded.success:
        return loaded
    block = loaded.value

    if block.active:
        block.active = False
        block.updated_at = utc_timestamp()
        await db.flush()
        logger.info("Deactivated room block %s", block_id)
    return Result.ok(block)


async def update_rooms_booked(
    db: AsyncSession,
    caller: str,
    block_id: int,
    rooms_booked: int,
) -> Result[RoomBlock]:
    """Set the booked-room count. Decreases (cancellations) are allowed unless disabled in settings."""
    loaded = await lock_owned_block(db, caller, block_id)
    if not loaded.success:
        return loaded
    block = loaded.value

    if rooms_booked < 0 or rooms_booked > block.total_rooms:
        return _reject(
            ErrorCode.INVALID_QUANTITY,
            "%d rooms booked is outside 0..%d for room block %s",
            rooms_booked,
            block.total_rooms,
            block_id,
        )
    if not settings.allow_booking_decrease and rooms_booked < block.rooms_booked:
        return _reject(
            ErrorCode.INVALID_QUANTITY,
            "booking count of room block %s cannot drop from %d to %d",
            block_id,
            block.rooms_booked,
            rooms_booked,
        )

    block.rooms_booked = rooms_booked
    block.updated_at = utc_timestamp()
    await db.flush()
    logger.info("Room block %s now has %d/%d rooms booked", block_id, rooms_booked, block.total_rooms)
    return Result.ok(block)


async def get(db: AsyncSession, block_id: int) -> Result[RoomBlock]:
    block = await _load_block(db, block_id)
    if block is None:
        return Result.fail(ErrorCode.NOT_FOUND)
    return Result.ok(block)


async def list_for_owner(
    db: AsyncSession,
    owner: str,
    active: bool | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[RoomBlock], int]:
    """Return a page of ``owner``'s blocks, newest first, and the total count."""
    filters = [RoomBlock.property_owner == owner]
    if active is not None:
        filters.append(RoomBlock.active == active)

    count_query = select(func.count()).select_from(RoomBlock).where(*filters)
    total_result = await db.execute(count_query)
    total = total_result.scalar_one()

    items_query = select(RoomBlock).where(*filters).order_by(RoomBlock.id.desc()).offset(skip).limit(limit)
    result = await db.execute(items_query)
    return list(result.scalars().all()), total
