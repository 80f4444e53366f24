"""Property registry — registration, admin verification and the admin singleton."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomblock.config import settings
from roomblock.domain.authorization import is_admin
from roomblock.domain.clock import utc_timestamp
from roomblock.domain.errors import ErrorCode, Result
from roomblock.models.property import Property
from roomblock.models.registry_admin import REGISTRY_ADMIN_ID, RegistryAdmin

logger = logging.getLogger(__name__)


def _reject(code: ErrorCode, message: str, *args: object) -> Result:
    logger.warning("%s: " + message, code.value, *args)
    return Result.fail(code)


async def _load_property(db: AsyncSession, owner: str, *, for_update: bool = False) -> Property | None:
    query = select(Property).where(Property.owner == owner)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def _load_admin_record(db: AsyncSession, *, for_update: bool = False) -> RegistryAdmin | None:
    query = select(RegistryAdmin).where(RegistryAdmin.id == REGISTRY_ADMIN_ID)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def _get_or_create_admin_record(db: AsyncSession, *, for_update: bool = False) -> RegistryAdmin:
    """Return the admin singleton, seeding it from settings the first time.

    A concurrent transaction may seed it between the lookup and the insert;
    the insert runs in a savepoint and the row is read again on conflict.
    """
    record = await _load_admin_record(db, for_update=for_update)
    if record is not None:
        return record

    now = utc_timestamp()
    record = RegistryAdmin(
        id=REGISTRY_ADMIN_ID,
        admin=settings.registry_admin,
        created_at=now,
        updated_at=now,
    )
    try:
        async with db.begin_nested():
            db.add(record)
    except IntegrityError:
        logger.info("Registry admin was seeded concurrently, reloading")
        return await _load_admin_record(db, for_update=for_update)

    logger.info("Seeded registry admin from settings: %s", settings.registry_admin)
    return record


async def ensure_admin(db: AsyncSession) -> str:
    """Seed the admin singleton if it does not exist yet and return the current admin."""
    record = await _get_or_create_admin_record(db)
    return record.admin


async def get_admin(db: AsyncSession) -> str:
    """Current registry admin identity. Falls back to settings until the row is seeded."""
    record = await _load_admin_record(db)
    if record is None:
        return settings.registry_admin
    return record.admin


async def register(db: AsyncSession, owner: str, name: str, location: str) -> Result[Property]:
    """Register ``owner``'s property, unverified. Re-registration is rejected, not upserted."""
    if await _load_property(db, owner) is not None:
        return _reject(ErrorCode.ALREADY_REGISTERED, "owner %s already has a property", owner)

    now = utc_timestamp()
    prop = Property(
        owner=owner,
        name=name,
        location=location,
        verified=False,
        verification_date=None,
        created_at=now,
        updated_at=now,
    )
    try:
        async with db.begin_nested():
            db.add(prop)
    except IntegrityError:
        # Another transaction registered the same owner after our lookup
        return _reject(ErrorCode.ALREADY_REGISTERED, "owner %s already has a property", owner)
    logger.info("Registered property %r for owner %s", name, owner)
    return Result.ok(prop)


async def verify(
    db: AsyncSession,
    caller: str,
    target_owner: str,
    now: int | None = None,
) -> Result[Property]:
    """Mark ``target_owner``'s property verified (admin only).

    Verifying an already verified property succeeds and refreshes
    ``verification_date``.
    """
    admin = await _get_or_create_admin_record(db, for_update=True)
    if not is_admin(caller, admin.admin):
        return _reject(ErrorCode.UNAUTHORIZED, "%s is not the registry admin", caller)

    prop = await _load_property(db, target_owner, for_update=True)
    if prop is None:
        return _reject(ErrorCode.NOT_FOUND, "no property registered for %s", target_owner)

    stamp = utc_timestamp() if now is None else now
    prop.verified = True
    prop.verification_date = stamp
    prop.updated_at = stamp
    await db.flush()
    logger.info("Verified property of %s at %s", target_owner, stamp)
    return Result.ok(prop)


async def revoke(db: AsyncSession, caller: str, target_owner: str) -> Result[Property]:
    """Withdraw verification (admin only).

    Room blocks created while the property was verified stay valid; only new
    blocks are gated. Revoking an unverified property is a no-op success.
    """
    admin = await _get_or_create_admin_record(db, for_update=True)
    if not is_admin(caller, admin.admin):
        return _reject(ErrorCode.UNAUTHORIZED, "%s is not the registry admin", caller)

    prop = await _load_property(db, target_owner, for_update=True)
    if prop is None:
        return _reject(ErrorCode.NOT_FOUND, "no property registered for %s", target_owner)

    if prop.verified:
        prop.verified = False
        prop.verification_date = None
        prop.updated_at = utc_timestamp()
        await db.flush()
        logger.info("Revoked verification of %s", target_owner)
    return Result.ok(prop)


async def is_verified(db: AsyncSession, owner: str) -> bool:
    """Absent owners are treated as not verified."""
    prop = await _load_property(db, owner)
    return prop is not None and prop.verified


async def get_details(db: AsyncSession, owner: str) -> Result[Property]:
    prop = await _load_property(db, owner)
    if prop is None:
        return Result.fail(ErrorCode.NOT_FOUND)
    return Result.ok(prop)


async def transfer_admin(db: AsyncSession, caller: str, new_admin: str) -> Result[str]:
    """Hand the admin capability to ``new_admin``; later admin checks read the new value."""
    record = await _get_or_create_admin_record(db, for_update=True)
    if not is_admin(caller, record.admin):
        return _reject(ErrorCode.UNAUTHORIZED, "%s is not the registry admin", caller)

    record.admin = new_admin
    record.updated_at = utc_timestamp()
    await db.flush()
    logger.info("Registry admin transferred from %s to %s", caller, new_admin)
    return Result.ok(new_admin)
