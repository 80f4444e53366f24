"""create_room_block_tables

Revision ID: 3f9c1a7d2b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "registry_admin",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("admin", sa.String(128), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=True),
        sa.Column("updated_at", sa.BigInteger(), nullable=True),
    )

    op.create_table(
        "properties",
        sa.Column("owner", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verification_date", sa.BigInteger(), nullable=True),
        sa.Column("created_at", sa.BigInteger(), nullable=True),
        sa.Column("updated_at", sa.BigInteger(), nullable=True),
    )

    op.create_table(
        "room_blocks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("property_owner", sa.String(128), sa.ForeignKey("properties.owner"), nullable=False),
        sa.Column("event_name", sa.String(255), nullable=False),
        sa.Column("start_date", sa.BigInteger(), nullable=False),
        sa.Column("end_date", sa.BigInteger(), nullable=False),
        sa.Column("total_rooms", sa.Integer(), nullable=False),
        sa.Column("price_per_room", sa.BigInteger(), nullable=False),
        sa.Column("rooms_booked", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.BigInteger(), nullable=True),
        sa.Column("updated_at", sa.BigInteger(), nullable=True),
        sa.CheckConstraint("start_date < end_date", name="ck_room_blocks_dates"),
        sa.CheckConstraint("total_rooms > 0", name="ck_room_blocks_total_rooms"),
        sa.CheckConstraint(
            "rooms_booked >= 0 AND rooms_booked <= total_rooms", name="ck_room_blocks_rooms_booked"
        ),
    )
    op.create_index("ix_room_blocks_property_owner", "room_blocks", ["property_owner"])
    op.create_index("ix_room_blocks_active", "room_blocks", ["active"])

    op.create_table(
        "attrition_policies",
        sa.Column("block_id", sa.Integer(), sa.ForeignKey("room_blocks.id"), primary_key=True),
        sa.Column("min_pickup_percentage", sa.Integer(), nullable=False),
        sa.Column("penalty_percentage", sa.Integer(), nullable=False),
        sa.Column("grace_period_days", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=True),
        sa.Column("updated_at", sa.BigInteger(), nullable=True),
        sa.CheckConstraint("min_pickup_percentage BETWEEN 0 AND 100", name="ck_attrition_min_pickup"),
        sa.CheckConstraint("penalty_percentage BETWEEN 0 AND 100", name="ck_attrition_penalty"),
        sa.CheckConstraint("grace_period_days >= 0", name="ck_attrition_grace_period"),
    )


def downgrade() -> None:
    op.drop_table("attrition_policies")
    op.drop_index("ix_room_blocks_active", table_name="room_blocks")
    op.drop_index("ix_room_blocks_property_owner", table_name="room_blocks")
    op.drop_table("room_blocks")
    op.drop_table("properties")
    op.drop_table("registry_admin")
