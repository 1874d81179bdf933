"""
Contracts for members.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import field_validator

from .base import BaseContract, RequiredStr


class MemberProfile(BaseContract):
    phone: RequiredStr
    profession: RequiredStr
    segment: RequiredStr
    linkedin: Optional[str] = None
    company_description: Optional[str] = None


class MemberUpdate(BaseContract):
    # Required profile fields may be omitted but never cleared
    phone: Optional[RequiredStr] = None
    linkedin: Optional[str] = None
    profession: Optional[RequiredStr] = None
    segment: Optional[RequiredStr] = None
    company_description: Optional[str] = None

    @field_validator("phone", "profession", "segment")
    @classmethod
    def not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("cannot be cleared")
        return value


class MemberResponse(BaseContract):
    id: UUID
    intention_id: UUID
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    profession: Optional[str] = None
    segment: Optional[str] = None
    company_description: Optional[str] = None
    is_active: bool = True
    profile_complete: bool = False
    joined_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # Joined fields from intention
    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None


class MemberLoginRequest(BaseContract):
    email: RequiredStr


class MemberLoginResponse(BaseContract):
    needs_completion: bool
    member: MemberResponse
