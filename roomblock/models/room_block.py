"""Room block model — event room inventory held at a property."""

from sqlalchemy import BigInteger, Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from roomblock.database import Base, TimestampMixin


class RoomBlock(TimestampMixin, Base):
    """Rooms reserved for a named event, with the running count actually booked."""

    __tablename__ = "room_blocks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_owner: Mapped[str] = mapped_column(
        ForeignKey("properties.owner"),
        nullable=False,
        index=True,
    )
    event_name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    end_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_rooms: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_room: Mapped[int] = mapped_column(BigInteger, nullable=False)
    rooms_booked: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_room_blocks_dates"),
        CheckConstraint("total_rooms > 0", name="ck_room_blocks_total_rooms"),
        CheckConstraint("rooms_booked >= 0 AND rooms_booked <= total_rooms", name="ck_room_blocks_rooms_booked"),
    )

    def __repr__(self) -> str:
        return (
            f"<RoomBlock(id={self.id}, owner={self.property_owner!r}, "
            f"booked={self.rooms_booked}/{self.total_rooms}, active={self.active})>"
        )
