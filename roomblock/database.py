"""Async SQLAlchemy engine, session factory, and declarative base."""

from sqlalchemy import BigInteger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from roomblock.config import settings

# Largest values the Integer and BigInteger columns hold on PostgreSQL
INTEGER_MAX = 2**31 - 1
BIG_INTEGER_MAX = 2**63 - 1

engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=10,
    max_overflow=20,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """Mixin that adds created_at and updated_at columns, stamped by the service layer in epoch seconds."""

    created_at: Mapped[int | None] = mapped_column(BigInteger, default=None)
    updated_at: Mapped[int | None] = mapped_column(BigInteger, default=None)


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async database session for FastAPI dependency injection.

    One request is one transaction: everything flushed by the services is
    committed together, and any exception rolls the whole request back::

        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
