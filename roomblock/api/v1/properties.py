"""Property registry API routes — registration and admin verification."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomblock.api.deps import get_caller, get_db
from roomblock.api.errors import unwrap
from roomblock.schemas.common import Envelope
from roomblock.schemas.property import (
    AdminResponse,
    AdminTransfer,
    PropertyRegister,
    PropertyResponse,
    VerificationStatus,
)
from roomblock.services import property_registry

router = APIRouter(prefix="/api/v1", tags=["properties"])


@router.post(
    "/properties",
    response_model=Envelope[PropertyResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register the caller's property",
)
async def register_property(
    body: PropertyRegister,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[PropertyResponse]:
    """Register a property owned by the caller. It starts unverified."""
    prop = unwrap(await property_registry.register(db, caller, body.name, body.location))
    return Envelope(value=PropertyResponse.model_validate(prop))


@router.get(
    "/properties/{owner}",
    response_model=Envelope[PropertyResponse],
    summary="Get property details",
)
async def get_property(owner: str, db: AsyncSession = Depends(get_db)) -> Envelope[PropertyResponse]:
    prop = unwrap(await property_registry.get_details(db, owner))
    return Envelope(value=PropertyResponse.model_validate(prop))


@router.get(
    "/properties/{owner}/verified",
    response_model=Envelope[VerificationStatus],
    summary="Check whether an owner is verified",
)
async def get_verification_status(owner: str, db: AsyncSession = Depends(get_db)) -> Envelope[VerificationStatus]:
    """Unknown owners are reported as not verified rather than 404."""
    verified = await property_registry.is_verified(db, owner)
    return Envelope(value=VerificationStatus(owner=owner, verified=verified))


@router.post(
    "/properties/{owner}/verify",
    response_model=Envelope[PropertyResponse],
    summary="Verify a property (admin only)",
)
async def verify_property(
    owner: str,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[PropertyResponse]:
    prop = unwrap(await property_registry.verify(db, caller, owner))
    return Envelope(value=PropertyResponse.model_validate(prop))


@router.post(
    "/properties/{owner}/revoke",
    response_model=Envelope[PropertyResponse],
    summary="Revoke a property's verification (admin only)",
)
async def revoke_property(
    owner: str,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[PropertyResponse]:
    prop = unwrap(await property_registry.revoke(db, caller, owner))
    return Envelope(value=PropertyResponse.model_validate(prop))


@router.get(
    "/registry/admin",
    response_model=Envelope[AdminResponse],
    summary="Current registry admin",
)
async def get_admin(db: AsyncSession = Depends(get_db)) -> Envelope[AdminResponse]:
    return Envelope(value=AdminResponse(admin=await property_registry.get_admin(db)))


@router.post(
    "/registry/admin/transfer",
    response_model=Envelope[AdminResponse],
    summary="Transfer the registry admin role",
)
async def transfer_admin(
    body: AdminTransfer,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[AdminResponse]:
    new_admin = unwrap(await property_registry.transfer_admin(db, caller, body.new_admin))
    return Envelope(value=AdminResponse(admin=new_admin))
