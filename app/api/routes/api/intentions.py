"""
Intention routes — POST, GET, GET /validate/{token}, GET /{id},
PATCH /{id}/approve, PATCH /{id}/reject, PATCH /{id}/tracking-status
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends

from app.contracts.intention import (
    ApprovalResponse,
    IntentionCreate,
    IntentionResponse,
    PublicIntentionResponse,
    TokenValidationResponse,
    TrackingStatusUpdate,
)
from app.dependencies.auth import require_admin
from app.dependencies.providers import get_intention_service
from app.models.enums import IntentionStatus
from app.services.intentions.intention_service import IntentionService

router = APIRouter()


@router.post("", response_model=PublicIntentionResponse, status_code=201)
async def submit_intention(
    payload: IntentionCreate,
    service: IntentionService = Depends(get_intention_service),
):
    return await service.submit(
        name=payload.name,
        email=payload.email,
        company=payload.company,
        reason=payload.reason,
    )


@router.get("", response_model=List[IntentionResponse], dependencies=[Depends(require_admin)])
async def list_intentions(
    status: Optional[IntentionStatus] = None,
    referred_by: Optional[UUID] = None,
    service: IntentionService = Depends(get_intention_service),
):
    return await service.list(status=status, referred_by=referred_by)


@router.get("/validate/{token}", response_model=TokenValidationResponse)
async def validate_token(
    token: str,
    service: IntentionService = Depends(get_intention_service),
):
    return await service.validate_token(token)


@router.get("/{intention_id}", response_model=IntentionResponse, dependencies=[Depends(require_admin)])
async def get_intention(
    intention_id: UUID,
    service: IntentionService = Depends(get_intention_service),
):
    return await service.get(intention_id)


@router.patch(
    "/{intention_id}/approve",
    response_model=ApprovalResponse,
    dependencies=[Depends(require_admin)],
)
async def approve_intention(
    intention_id: UUID,
    service: IntentionService = Depends(get_intention_service),
):
    return await service.approve(intention_id)


@router.patch(
    "/{intention_id}/reject",
    response_model=IntentionResponse,
    dependencies=[Depends(require_admin)],
)
async def reject_intention(
    intention_id: UUID,
    service: IntentionService = Depends(get_intention_service),
):
    return await service.reject(intention_id)


@router.patch("/{intention_id}/tracking-status", response_model=PublicIntentionResponse)
async def update_tracking_status(
    intention_id: UUID,
    payload: TrackingStatusUpdate,
    service: IntentionService = Depends(get_intention_service),
):
    return await service.update_tracking_status(intention_id, payload.tracking_status)
