"""Property model — hotel properties and their verification state."""

from sqlalchemy import BigInteger, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from roomblock.database import Base, TimestampMixin


class Property(TimestampMixin, Base):
    """A hotel property, keyed by its owner's identity.

    ``verification_date`` is set if and only if ``verified`` is true.
    """

    __tablename__ = "properties"

    owner: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verification_date: Mapped[int | None] = mapped_column(BigInteger, default=None)

    def __repr__(self) -> str:
        return f"<Property(owner={self.owner!r}, name={self.name!r}, verified={self.verified})>"
