"""Tests for the room block service (pure DB, no HTTP)."""

import pytest
from conftest import ADMIN, END_DATE, OTHER_OWNER, OWNER, START_DATE
from sqlalchemy.ext.asyncio import AsyncSession

from roomblock.config import settings
from roomblock.database import BIG_INTEGER_MAX, INTEGER_MAX
from roomblock.domain.errors import ErrorCode
from roomblock.services import property_registry, room_block_service

pytestmark = pytest.mark.asyncio


async def _create_block(db_session: AsyncSession, total_rooms: int = 50, price: int = 200) -> int:
    result = await room_block_service.create(
        db_session, OWNER, "Tech Conference 2023", START_DATE, END_DATE, total_rooms, price
    )
    return result.unwrap()


class TestCreate:
    async def test_create_for_verified_owner(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)

        block = (await room_block_service.get(db_session, block_id)).unwrap()
        assert block.property_owner == OWNER
        assert block.event_name == "Tech Conference 2023"
        assert block.start_date == START_DATE
        assert block.end_date == END_DATE
        assert block.total_rooms == 50
        assert block.price_per_room == 200
        assert block.rooms_booked == 0
        assert block.active is True

    async def test_ids_increase(self, db_session: AsyncSession, verified_owner: str):
        first = await _create_block(db_session)
        second = await _create_block(db_session)
        assert second > first

    async def test_unregistered_owner_rejected(self, db_session: AsyncSession):
        result = await room_block_service.create(db_session, OWNER, "Event", START_DATE, END_DATE, 50, 200)
        assert result.error is ErrorCode.NOT_VERIFIED

    async def test_unverified_owner_rejected(self, db_session: AsyncSession):
        await property_registry.register(db_session, OWNER, "Grand Hotel", "New York")
        result = await room_block_service.create(db_session, OWNER, "Event", START_DATE, END_DATE, 50, 200)
        assert result.error is ErrorCode.NOT_VERIFIED

    async def test_verification_checked_before_dates(self, db_session: AsyncSession):
        result = await room_block_service.create(db_session, OWNER, "Event", END_DATE, START_DATE, 0, 200)
        assert result.error is ErrorCode.NOT_VERIFIED

    async def test_end_before_start_rejected(self, db_session: AsyncSession, verified_owner: str):
        result = await room_block_service.create(db_session, OWNER, "Event", END_DATE, START_DATE, 50, 200)
        assert result.error is ErrorCode.INVALID_DATES

    async def test_equal_dates_rejected(self, db_session: AsyncSession, verified_owner: str):
        result = await room_block_service.create(db_session, OWNER, "Event", START_DATE, START_DATE, 50, 200)
        assert result.error is ErrorCode.INVALID_DATES

    async def test_zero_rooms_rejected(self, db_session: AsyncSession, verified_owner: str):
        result = await room_block_service.create(db_session, OWNER, "Event", START_DATE, END_DATE, 0, 200)
        assert result.error is ErrorCode.INVALID_QUANTITY

    async def test_negative_price_rejected(self, db_session: AsyncSession, verified_owner: str):
        result = await room_block_service.create(db_session, OWNER, "Event", START_DATE, END_DATE, 50, -1)
        assert result.error is ErrorCode.INVALID_QUANTITY

    async def test_revocation_does_not_invalidate_existing_blocks(
        self, db_session: AsyncSession, verified_owner: str
    ):
        block_id = await _create_block(db_session)
        await property_registry.revoke(db_session, ADMIN, OWNER)

        assert (await room_block_service.get(db_session, block_id)).success
        updated = await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 5)
        assert updated.success

        again = await room_block_service.create(db_session, OWNER, "Event", START_DATE, END_DATE, 50, 200)
        assert again.error is ErrorCode.NOT_VERIFIED


class TestUpdate:
    async def test_owner_replaces_all_fields(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        result = await room_block_service.update(
            db_session, OWNER, block_id, "Tech Conference 2023 Updated", 1685664000, 1685836800, 60, 220
        )

        assert result.success
        block = (await room_block_service.get(db_session, block_id)).unwrap()
        assert block.event_name == "Tech Conference 2023 Updated"
        assert block.start_date == 1685664000
        assert block.end_date == 1685836800
        assert block.total_rooms == 60
        assert block.price_per_room == 220

    async def test_invalid_dates_leave_record_unchanged(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        result = await room_block_service.update(
            db_session, OWNER, block_id, "Renamed", END_DATE, START_DATE, 60, 220
        )

        assert result.error is ErrorCode.INVALID_DATES
        block = (await room_block_service.get(db_session, block_id)).unwrap()
        assert block.event_name == "Tech Conference 2023"
        assert block.start_date == START_DATE
        assert block.end_date == END_DATE
        assert block.total_rooms == 50
        assert block.price_per_room == 200

    async def test_total_below_booked_rejected(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 30)

        result = await room_block_service.update(db_session, OWNER, block_id, "Event", START_DATE, END_DATE, 29, 200)
        assert result.error is ErrorCode.INVALID_QUANTITY
        assert (await room_block_service.get(db_session, block_id)).unwrap().total_rooms == 50

    async def test_total_equal_to_booked_allowed(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 30)

        result = await room_block_service.update(db_session, OWNER, block_id, "Event", START_DATE, END_DATE, 30, 200)
        assert result.success

    async def test_non_owner_rejected_regardless_of_arguments(
        self, db_session: AsyncSession, verified_owner: str, verified_other_owner: str
    ):
        block_id = await _create_block(db_session)
        result = await room_block_service.update(
            db_session, OTHER_OWNER, block_id, "Hijack", END_DATE, START_DATE, 0, -5
        )
        assert result.error is ErrorCode.UNAUTHORIZED

    async def test_missing_block(self, db_session: AsyncSession, verified_owner: str):
        result = await room_block_service.update(db_session, OWNER, 999, "Event", START_DATE, END_DATE, 50, 200)
        assert result.error is ErrorCode.NOT_FOUND

    async def test_inactive_block_still_editable(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        await room_block_service.deactivate(db_session, OWNER, block_id)

        result = await room_block_service.update(db_session, OWNER, block_id, "Late Edit", START_DATE, END_DATE, 50, 200)
        assert result.success
        assert result.value.active is False


class TestDeactivate:
    async def test_deactivate_twice_succeeds(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)

        first = await room_block_service.deactivate(db_session, OWNER, block_id)
        second = await room_block_service.deactivate(db_session, OWNER, block_id)

        assert first.success
        assert second.success
        assert (await room_block_service.get(db_session, block_id)).unwrap().active is False

    async def test_non_owner_rejected(
        self, db_session: AsyncSession, verified_owner: str, verified_other_owner: str
    ):
        block_id = await _create_block(db_session)
        result = await room_block_service.deactivate(db_session, OTHER_OWNER, block_id)

        assert result.error is ErrorCode.UNAUTHORIZED
        assert (await room_block_service.get(db_session, block_id)).unwrap().active is True

    async def test_missing_block(self, db_session: AsyncSession):
        result = await room_block_service.deactivate(db_session, OWNER, 999)
        assert result.error is ErrorCode.NOT_FOUND


class TestUpdateRoomsBooked:
    @pytest.mark.parametrize("rooms_booked", [0, 1, 25, 50])
    async def test_within_bounds(self, db_session: AsyncSession, verified_owner: str, rooms_booked: int):
        block_id = await _create_block(db_session)
        result = await room_block_service.update_rooms_booked(db_session, OWNER, block_id, rooms_booked)

        assert result.success
        assert (await room_block_service.get(db_session, block_id)).unwrap().rooms_booked == rooms_booked

    async def test_above_total_rejected(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        result = await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 51)

        assert result.error is ErrorCode.INVALID_QUANTITY
        assert (await room_block_service.get(db_session, block_id)).unwrap().rooms_booked == 0

    async def test_negative_rejected(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        result = await room_block_service.update_rooms_booked(db_session, OWNER, block_id, -1)
        assert result.error is ErrorCode.INVALID_QUANTITY

    async def test_decrease_allowed_by_default(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 30)
        result = await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 20)
        assert result.success
        assert result.value.rooms_booked == 20

    async def test_decrease_rejected_when_disabled(
        self, db_session: AsyncSession, verified_owner: str, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(settings, "allow_booking_decrease", False)
        block_id = await _create_block(db_session)
        await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 30)

        result = await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 20)
        assert result.error is ErrorCode.INVALID_QUANTITY
        assert (await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 35)).success

    async def test_non_owner_rejected(
        self, db_session: AsyncSession, verified_owner: str, verified_other_owner: str
    ):
        block_id = await _create_block(db_session)
        result = await room_block_service.update_rooms_booked(db_session, OTHER_OWNER, block_id, 10)
        assert result.error is ErrorCode.UNAUTHORIZED


class TestGetAndList:
    async def test_get_missing(self, db_session: AsyncSession):
        result = await room_block_service.get(db_session, 999)
        assert result.error is ErrorCode.NOT_FOUND

    async def test_list_for_owner(
        self, db_session: AsyncSession, verified_owner: str, verified_other_owner: str
    ):
        first = await _create_block(db_session)
        second = await _create_block(db_session)
        await room_block_service.create(db_session, OTHER_OWNER, "Elsewhere", START_DATE, END_DATE, 10, 100)
        await room_block_service.deactivate(db_session, OWNER, first)

        items, total = await room_block_service.list_for_owner(db_session, OWNER)
        assert total == 2
        assert [b.id for b in items] == [second, first]

        active_items, active_total = await room_block_service.list_for_owner(db_session, OWNER, active=True)
        assert active_total == 1
        assert [b.id for b in active_items] == [second]

    async def test_list_pagination(self, db_session: AsyncSession, verified_owner: str):
        ids = [await _create_block(db_session) for _ in range(3)]

        items, total = await room_block_service.list_for_owner(db_session, OWNER, skip=1, limit=1)
        assert total == 3
        assert [b.id for b in items] == [ids[1]]


class TestColumnLimits:
    async def test_rooms_beyond_integer_column(self, db_session: AsyncSession, verified_owner: str):
        result = await room_block_service.create(
            db_session, OWNER, "Event", START_DATE, END_DATE, INTEGER_MAX + 1, 200
        )
        assert result.error is ErrorCode.INVALID_QUANTITY

    async def test_largest_room_count_accepted(self, db_session: AsyncSession, verified_owner: str):
        result = await room_block_service.create(db_session, OWNER, "Event", START_DATE, END_DATE, INTEGER_MAX, 200)
        assert result.success

    async def test_price_beyond_big_integer_column(self, db_session: AsyncSession, verified_owner: str):
        result = await room_block_service.create(
            db_session, OWNER, "Event", START_DATE, END_DATE, 50, BIG_INTEGER_MAX + 1
        )
        assert result.error is ErrorCode.INVALID_QUANTITY

    async def test_end_date_beyond_big_integer_column(self, db_session: AsyncSession, verified_owner: str):
        result = await room_block_service.create(db_session, OWNER, "Event", START_DATE, 10**20, 50, 200)
        assert result.error is ErrorCode.INVALID_DATES

    async def test_update_rooms_beyond_integer_column(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        result = await room_block_service.update(
            db_session, OWNER, block_id, "Event", START_DATE, END_DATE, 10**20, 200
        )
        assert result.error is ErrorCode.INVALID_QUANTITY
        assert (await room_block_service.get(db_session, block_id)).unwrap().total_rooms == 50

    async def test_huge_rooms_booked(self, db_session: AsyncSession, verified_owner: str):
        block_id = await _create_block(db_session)
        result = await room_block_service.update_rooms_booked(db_session, OWNER, block_id, 10**20)
        assert result.error is ErrorCode.INVALID_QUANTITY

    @pytest.mark.parametrize("block_id", [10**20, -(10**20), 0])
    async def test_out_of_range_id_not_found(self, db_session: AsyncSession, verified_owner: str, block_id: int):
        assert (await room_block_service.get(db_session, block_id)).error is ErrorCode.NOT_FOUND
        result = await room_block_service.deactivate(db_session, OWNER, block_id)
        assert result.error is ErrorCode.NOT_FOUND
