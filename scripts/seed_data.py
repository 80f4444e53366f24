"""Seed the database with a demo property, room blocks and attrition policies.

Goes through the service layer, so every record passes the same checks as
an API call would.

Run from the project root:
    python -m scripts.seed_data
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete, select

from roomblock.auth.jwt import create_access_token
from roomblock.database import async_session_factory
from roomblock.models.attrition_policy import AttritionPolicy
from roomblock.models.property import Property
from roomblock.models.room_block import RoomBlock
from roomblock.services import attrition_service, property_registry, room_block_service

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

DEMO_OWNER = "ST2PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"

DEMO_PROPERTY = {
    "name": "Grand Hotel",
    "location": "New York",
}

ROOM_BLOCKS = [
    {
        "event_name": "Tech Conference 2023",
        "start_date": 1685577600,  # 2023-06-01
        "end_date": 1685750400,  # 2023-06-03
        "total_rooms": 50,
        "price_per_room": 200,
        "rooms_booked": 30,
        "policy": (80, 50, 7),
    },
    {
        "event_name": "Medical Symposium 2023",
        "start_date": 1694649600,  # 2023-09-14
        "end_date": 1694908800,  # 2023-09-17
        "total_rooms": 120,
        "price_per_room": 185,
        "rooms_booked": 101,
        "policy": (85, 40, 14),
    },
    {
        "event_name": "Architecture Summit 2024",
        "start_date": 1714521600,  # 2024-05-01
        "end_date": 1714694400,  # 2024-05-03
        "total_rooms": 30,
        "price_per_room": 240,
        "rooms_booked": 12,
        "policy": (70, 60, 10),
    },
]


async def seed() -> None:
    """Populate the database with demo room blocks.

    Idempotent: removes the demo owner's existing records first.
    """
    async with async_session_factory() as session:
        admin = await property_registry.get_admin(session)

        result = await session.execute(select(RoomBlock.id).where(RoomBlock.property_owner == DEMO_OWNER))
        block_ids = list(result.scalars().all())
        if block_ids:
            print(f"⚠️  Demo owner already has {len(block_ids)} room blocks. Deleting and re-seeding...")
            await session.execute(delete(AttritionPolicy).where(AttritionPolicy.block_id.in_(block_ids)))
            await session.execute(delete(RoomBlock).where(RoomBlock.id.in_(block_ids)))
        await session.execute(delete(Property).where(Property.owner == DEMO_OWNER))
        await session.flush()

        (await property_registry.register(session, DEMO_OWNER, **DEMO_PROPERTY)).unwrap()
        (await property_registry.verify(session, admin, DEMO_OWNER)).unwrap()
        print(f"✅ Registered and verified {DEMO_PROPERTY['name']} for {DEMO_OWNER}")

        for data in ROOM_BLOCKS:
            block_id = (
                await room_block_service.create(
                    session,
                    DEMO_OWNER,
                    data["event_name"],
                    data["start_date"],
                    data["end_date"],
                    data["total_rooms"],
                    data["price_per_room"],
                )
            ).unwrap()
            (await room_block_service.update_rooms_booked(session, DEMO_OWNER, block_id, data["rooms_booked"])).unwrap()
            min_pickup, penalty, grace = data["policy"]
            (await attrition_service.create_policy(session, DEMO_OWNER, block_id, min_pickup, penalty, grace)).unwrap()

            assessment = (await attrition_service.calculate_attrition(session, block_id)).unwrap()
            print(
                f"   🏨 #{block_id} {data['event_name']}: "
                f"{data['rooms_booked']}/{data['total_rooms']} booked, penalty {assessment.penalty} ({assessment.status})"
            )

        await session.commit()

        print()
        print("=" * 60)
        print("📊 Seed Summary")
        print("=" * 60)
        print(f"   Registry admin: {admin}")
        print(f"   Owner:          {DEMO_OWNER}")
        print(f"   Room blocks:    {len(ROOM_BLOCKS)}")
        print(f"   Owner token:    {create_access_token(DEMO_OWNER)}")
        print("=" * 60)


if __name__ == "__main__":
    asyncio.run(seed())
