"""Attrition policy and penalty API routes, nested under a room block."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomblock.api.deps import get_caller, get_db
from roomblock.api.errors import unwrap
from roomblock.schemas.attrition import (
    AttritionAssessmentResponse,
    AttritionPolicyResponse,
    AttritionPolicyTerms,
)
from roomblock.schemas.common import Envelope
from roomblock.services import attrition_service

router = APIRouter(prefix="/api/v1/room-blocks/{block_id}", tags=["attrition"])


@router.post(
    "/attrition-policy",
    response_model=Envelope[AttritionPolicyResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create the block's attrition policy",
)
async def create_attrition_policy(
    block_id: int,
    body: AttritionPolicyTerms,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[AttritionPolicyResponse]:
    policy = unwrap(
        await attrition_service.create_policy(
            db,
            caller,
            block_id,
            body.min_pickup_percentage,
            body.penalty_percentage,
            body.grace_period_days,
        )
    )
    return Envelope(value=AttritionPolicyResponse.model_validate(policy))


@router.put(
    "/attrition-policy",
    response_model=Envelope[AttritionPolicyResponse],
    summary="Update the block's attrition policy",
)
async def update_attrition_policy(
    block_id: int,
    body: AttritionPolicyTerms,
    db: AsyncSession = Depends(get_db),
    caller: str = Depends(get_caller),
) -> Envelope[AttritionPolicyResponse]:
    policy = unwrap(
        await attrition_service.update_policy(
            db,
            caller,
            block_id,
            body.min_pickup_percentage,
            body.penalty_percentage,
            body.grace_period_days,
        )
    )
    return Envelope(value=AttritionPolicyResponse.model_validate(policy))


@router.get(
    "/attrition-policy",
    response_model=Envelope[AttritionPolicyResponse],
    summary="Get the block's attrition policy",
)
async def get_attrition_policy(
    block_id: int,
    db: AsyncSession = Depends(get_db),
) -> Envelope[AttritionPolicyResponse]:
    policy = unwrap(await attrition_service.get_policy(db, block_id))
    return Envelope(value=AttritionPolicyResponse.model_validate(policy))


@router.get(
    "/attrition",
    response_model=Envelope[AttritionAssessmentResponse],
    summary="Calculate the attrition penalty",
)
async def calculate_attrition(
    block_id: int,
    as_of: int | None = Query(None, ge=0, description="Assess as of this time (seconds since epoch); defaults to now"),
    db: AsyncSession = Depends(get_db),
) -> Envelope[AttritionAssessmentResponse]:
    assessment = unwrap(await attrition_service.calculate_attrition(db, block_id, as_of=as_of))
    return Envelope(value=AttritionAssessmentResponse.model_validate(assessment))
