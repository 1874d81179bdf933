"""
Member routes — POST /register/{token}, POST /login, POST /{id}/complete-profile,
GET, GET /{id}, PATCH /{id}, PATCH /{id}/deactivate
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from app.contracts.member import (
    MemberLoginRequest,
    MemberLoginResponse,
    MemberProfile,
    MemberResponse,
    MemberUpdate,
)
from app.dependencies.auth import require_admin
from app.dependencies.providers import get_member_service
from app.services.members.member_service import MemberService

router = APIRouter()


@router.post("/register/{token}", response_model=MemberResponse)
async def complete_registration(
    token: str,
    payload: MemberProfile,
    response: Response,
    service: MemberService = Depends(get_member_service),
):
    member, created = await service.complete_registration(token, **payload.model_dump())
    if created:
        response.status_code = status.HTTP_201_CREATED
    return member


@router.post("/login", response_model=MemberLoginResponse)
async def login(
    payload: MemberLoginRequest,
    service: MemberService = Depends(get_member_service),
):
    return await service.login(payload.email)


@router.post("/{member_id}/complete-profile", response_model=MemberResponse)
async def complete_profile(
    member_id: UUID,
    payload: MemberProfile,
    service: MemberService = Depends(get_member_service),
):
    return await service.complete_profile(member_id, **payload.model_dump())


@router.get("", response_model=List[MemberResponse], dependencies=[Depends(require_admin)])
async def list_members(
    is_active: Optional[bool] = None,
    service: MemberService = Depends(get_member_service),
):
    return await service.list(is_active=is_active)


@router.get("/{member_id}", response_model=MemberResponse, dependencies=[Depends(require_admin)])
async def get_member(
    member_id: UUID,
    service: MemberService = Depends(get_member_service),
):
    return await service.get(member_id)


@router.patch("/{member_id}", response_model=MemberResponse, dependencies=[Depends(require_admin)])
async def update_member(
    member_id: UUID,
    payload: MemberUpdate,
    service: MemberService = Depends(get_member_service),
):
    return await service.update(member_id, payload)


@router.patch(
    "/{member_id}/deactivate",
    response_model=MemberResponse,
    dependencies=[Depends(require_admin)],
)
async def deactivate_member(
    member_id: UUID,
    service: MemberService = Depends(get_member_service),
):
    return await service.deactivate(member_id)
