"""Attrition penalty arithmetic.

The penalty is charged on the shortfall only: the rooms missing between what
was booked and the committed minimum, valued at the block's room price and
scaled by the policy's penalty percentage. All arithmetic is on non-negative
integers, so floor division is also truncation toward zero.
"""

from dataclasses import dataclass

PENDING = "pending"
FINAL = "final"

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class AttritionAssessment:
    """Penalty breakdown for one room block at a point in time."""

    block_id: int
    pickup_percentage: int
    required_rooms: int
    shortfall_rooms: int
    penalty: int
    status: str  # pending, final
    assessable_at: int

    @property
    def is_final(self) -> bool:
        return self.status == FINAL


def pickup_percentage(rooms_booked: int, total_rooms: int) -> int:
    """Booked share of the block as a truncated integer percentage."""
    return rooms_booked * 100 // total_rooms


def required_rooms(total_rooms: int, min_pickup_percentage: int) -> int:
    """Rooms needed to meet the minimum pickup, rounded up to a whole room."""
    return -(-total_rooms * min_pickup_percentage // 100)


def shortfall_rooms(
    rooms_booked: int,
    total_rooms: int,
    min_pickup_percentage: int,
) -> int:
    """Rooms missing from the committed minimum; 0 when pickup is met."""
    if pickup_percentage(rooms_booked, total_rooms) >= min_pickup_percentage:
        return 0
    return max(required_rooms(total_rooms, min_pickup_percentage) - rooms_booked, 0)


def penalty_amount(shortfall: int, price_per_room: int, penalty_percentage: int) -> int:
    return shortfall * price_per_room * penalty_percentage // 100


def assessable_at(end_date: int, grace_period_days: int, seconds_per_day: int = SECONDS_PER_DAY) -> int:
    """Instant from which the penalty is final: event end plus the grace period."""
    return end_date + grace_period_days * seconds_per_day


def assess(
    *,
    block_id: int,
    rooms_booked: int,
    total_rooms: int,
    price_per_room: int,
    end_date: int,
    min_pickup_percentage: int,
    penalty_percentage: int,
    grace_period_days: int,
    as_of: int,
    seconds_per_day: int = SECONDS_PER_DAY,
) -> AttritionAssessment:
    """Compute the penalty for a block and say whether it is final yet.

    Before ``end_date + grace_period_days`` the result is ``pending`` and the
    penalty is a projection from the current booking count; from that instant
    on (inclusive) it is ``final``.
    """
    pct = pickup_percentage(rooms_booked, total_rooms)
    shortfall = shortfall_rooms(rooms_booked, total_rooms, min_pickup_percentage)
    due_at = assessable_at(end_date, grace_period_days, seconds_per_day)
    return AttritionAssessment(
        block_id=block_id,
        pickup_percentage=pct,
        required_rooms=required_rooms(total_rooms, min_pickup_percentage),
        shortfall_rooms=shortfall,
        penalty=penalty_amount(shortfall, price_per_room, penalty_percentage),
        status=FINAL if as_of >= due_at else PENDING,
        assessable_at=due_at,
    )
