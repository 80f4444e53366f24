"""Attrition policy engine — policy records per room block and penalty assessment."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roomblock.database import INTEGER_MAX
from roomblock.domain.attrition import AttritionAssessment, assess
from roomblock.domain.clock import utc_timestamp
from roomblock.domain.errors import ErrorCode, Result
from roomblock.models.attrition_policy import AttritionPolicy
from roomblock.services import room_block_service

logger = logging.getLogger(__name__)


def _reject(code: ErrorCode, message: str, *args: object) -> Result:
    logger.warning("%s: " + message, code.value, *args)
    return Result.fail(code)


def _check_terms(min_pickup_percentage: int, penalty_percentage: int, grace_period_days: int) -> ErrorCode | None:
    if not 0 <= min_pickup_percentage <= 100 or not 0 <= penalty_percentage <= 100:
        return ErrorCode.INVALID_PERCENTAGE
    if not 0 <= grace_period_days <= INTEGER_MAX:
        return ErrorCode.INVALID_QUANTITY
    return None


async def _load_policy(db: AsyncSession, block_id: int, *, for_update: bool = False) -> AttritionPolicy | None:
    if not 0 < block_id <= INTEGER_MAX:
        return None
    query = select(AttritionPolicy).where(AttritionPolicy.block_id == block_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def create_policy(
    db: AsyncSession,
    caller: str,
    block_id: int,
    min_pickup_percentage: int,
    penalty_percentage: int,
    grace_period_days: int,
) -> Result[AttritionPolicy]:
    """Attach the attrition policy to a block. A block has at most one; this never replaces it."""
    loaded = await room_block_service.lock_owned_block(db, caller, block_id)
    if not loaded.success:
        return loaded

    error = _check_terms(min_pickup_percentage, penalty_percentage, grace_period_days)
    if error is not None:
        return _reject(error, "rejected attrition policy for room block %s", block_id)
    if await _load_policy(db, block_id) is not None:
        return _reject(ErrorCode.POLICY_EXISTS, "room block %s already has an attrition policy", block_id)

    now = utc_timestamp()
    policy = AttritionPolicy(
        block_id=block_id,
        min_pickup_percentage=min_pickup_percentage,
        penalty_percentage=penalty_percentage,
        grace_period_days=grace_period_days,
        created_at=now,
        updated_at=now,
    )
    db.add(policy)
    await db.flush()
    logger.info(
        "Created attrition policy for room block %s: min pickup %d%%, penalty %d%%, grace %d days",
        block_id,
        min_pickup_percentage,
        penalty_percentage,
        grace_period_days,
    )
    return Result.ok(policy)


async def update_policy(
    db: AsyncSession,
    caller: str,
    block_id: int,
    min_pickup_percentage: int,
    penalty_percentage: int,
    grace_period_days: int,
) -> Result[AttritionPolicy]:
    """Replace the terms of an existing policy."""
    loaded = await room_block_service.lock_owned_block(db, caller, block_id)
    if not loaded.success:
        return loaded

    policy = await _load_policy(db, block_id, for_update=True)
    if policy is None:
        return _reject(ErrorCode.NOT_FOUND, "room block %s has no attrition policy", block_id)

    error = _check_terms(min_pickup_percentage, penalty_percentage, grace_period_days)
    if error is not None:
        return _reject(error, "rejected attrition policy update for room block %s", block_id)

    policy.min_pickup_percentage = min_pickup_percentage
    policy.penalty_percentage = penalty_percentage
    policy.grace_period_days = grace_period_days
    policy.updated_at = utc_timestamp()
    await db.flush()
    logger.info("Updated attrition policy for room block %s", block_id)
    return Result.ok(policy)


async def get_policy(db: AsyncSession, block_id: int) -> Result[AttritionPolicy]:
    policy = await _load_policy(db, block_id)
    if policy is None:
        return Result.fail(ErrorCode.NOT_FOUND)
    return Result.ok(policy)


async def calculate_attrition(
    db: AsyncSession,
    block_id: int,
    as_of: int | None = None,
) -> Result[AttritionAssessment]:
    """Assess the attrition penalty for a block from its policy and current bookings.

    ``as_of`` defaults to now; before the grace period has run out the
    assessment is returned as ``pending``.
    """
    loaded = await room_block_service.get(db, block_id)
    if not loaded.success:
        return loaded
    block = loaded.value

    policy = await _load_policy(db, block_id)
    if policy is None:
        return Result.fail(ErrorCode.NOT_FOUND)

    assessment = assess(
        block_id=block.id,
        rooms_booked=block.rooms_booked,
        total_rooms=block.total_rooms,
        price_per_room=block.price_per_room,
        end_date=block.end_date,
        min_pickup_percentage=policy.min_pickup_percentage,
        penalty_percentage=policy.penalty_percentage,
        grace_period_days=policy.grace_period_days,
        as_of=utc_timestamp() if as_of is None else as_of,
    )
    logger.debug(
        "Attrition for room block %s: pickup %d%%, shortfall %d, penalty %d (%s)",
        block_id,
        assessment.pickup_percentage,
        assessment.shortfall_rooms,
        assessment.penalty,
        assessment.status,
    )
    return Result.ok(assessment)
