"""Registry admin model — the single process-wide admin identity."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from roomblock.database import Base, TimestampMixin

REGISTRY_ADMIN_ID = 1


class RegistryAdmin(TimestampMixin, Base):
    """Singleton row; ``id`` is always ``REGISTRY_ADMIN_ID``."""

    __tablename__ = "registry_admin"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=REGISTRY_ADMIN_ID)
    admin: Mapped[str] = mapped_column(String(128), nullable=False)

    def __repr__(self) -> str:
        return f"<RegistryAdmin admin={self.admin!r}>"
