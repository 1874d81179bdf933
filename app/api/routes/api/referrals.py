"""
Referral routes — POST /refer/{giver_id}, POST, GET, GET /member/{member_id},
GET /{id}, PATCH /{id}, PATCH /{id}/status, DELETE /{id}
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.contracts.intention import IntentionCreate, PublicIntentionResponse
from app.contracts.referral import ReferralCreate, ReferralResponse, ReferralStatusUpdate, ReferralUpdate
from app.dependencies.auth import require_admin
from app.dependencies.providers import get_referral_service
from app.models.enums import ReferralStatus
from app.services.referrals.referral_service import ReferralService

router = APIRouter()


@router.post("/refer/{giver_id}", response_model=PublicIntentionResponse, status_code=201)
async def refer_new_member(
    giver_id: UUID,
    payload: IntentionCreate,
    service: ReferralService = Depends(get_referral_service),
):
    return await service.refer(giver_id, **payload.model_dump())


@router.post("", response_model=ReferralResponse, status_code=201)
async def create_referral(
    payload: ReferralCreate,
    service: ReferralService = Depends(get_referral_service),
):
    return await service.create(payload)


@router.get("", response_model=List[ReferralResponse], dependencies=[Depends(require_admin)])
async def list_referrals(
    status: Optional[ReferralStatus] = None,
    service: ReferralService = Depends(get_referral_service),
):
    return await service.list(status=status)


@router.get("/member/{member_id}", response_model=List[ReferralResponse])
async def list_member_referrals(
    member_id: UUID,
    direction: Optional[str] = Query(None, alias="type", description="'given' or 'received'"),
    service: ReferralService = Depends(get_referral_service),
):
    return await service.list_by_member(member_id, direction)


@router.get("/{referral_id}", response_model=ReferralResponse)
async def get_referral(
    referral_id: UUID,
    service: ReferralService = Depends(get_referral_service),
):
    return await service.get(referral_id)


@router.patch("/{referral_id}/status", response_model=ReferralResponse)
async def update_referral_status(
    referral_id: UUID,
    payload: ReferralStatusUpdate,
    service: ReferralService = Depends(get_referral_service),
):
    return await service.update_status(referral_id, payload.status)


@router.patch("/{referral_id}", response_model=ReferralResponse)
async def update_referral(
    referral_id: UUID,
    payload: ReferralUpdate,
    service: ReferralService = Depends(get_referral_service),
):
    return await service.update(referral_id, payload)


@router.delete("/{referral_id}", status_code=204)
async def delete_referral(
    referral_id: UUID,
    service: ReferralService = Depends(get_referral_service),
):
    await service.delete(referral_id)
