"""Attrition policy model — pickup minimum and penalty terms for one room block."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from roomblock.database import Base, TimestampMixin


class AttritionPolicy(TimestampMixin, Base):
    """At most one policy per block; ownership follows the block's property owner."""

    __tablename__ = "attrition_policies"

    block_id: Mapped[int] = mapped_column(
        ForeignKey("room_blocks.id"),
        primary_key=True,
    )
    min_pickup_percentage: Mapped[int] = mapped_column(Integer, nullable=False)
    penalty_percentage: Mapped[int] = mapped_column(Integer, nullable=False)
    grace_period_days: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("min_pickup_percentage BETWEEN 0 AND 100", name="ck_attrition_min_pickup"),
        CheckConstraint("penalty_percentage BETWEEN 0 AND 100", name="ck_attrition_penalty"),
        CheckConstraint("grace_period_days >= 0", name="ck_attrition_grace_period"),
    )

    def __repr__(self) -> str:
        return (
            f"<AttritionPolicy(block_id={self.block_id}, min_pickup={self.min_pickup_percentage}, "
            f"penalty={self.penalty_percentage})>"
        )
