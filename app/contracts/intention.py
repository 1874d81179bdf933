"""
Contracts for intentions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import field_validator

from .base import BaseContract, RequiredStr, TimestampedContract
from .member import MemberResponse


class IntentionCreate(BaseContract):
    name: RequiredStr
    email: RequiredStr
    company: RequiredStr
    reason: RequiredStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class IntentionMemberSummary(BaseContract):
    id: UUID
    is_active: bool = True
    joined_at: Optional[datetime] = None


class PublicIntentionResponse(TimestampedContract):
    """
    Intention as shown to unauthenticated callers; never carries the token.
    """
    id: UUID
    name: str
    email: str
    company: str
    reason: str
    status: str
    referred_by: Optional[UUID] = None
    tracking_status: Optional[str] = None


class IntentionResponse(PublicIntentionResponse):
    token: Optional[str] = None
    member: Optional[IntentionMemberSummary] = None


class ApprovalResponse(BaseContract):
    intention: IntentionResponse
    member: MemberResponse
    registration_link: str


class TokenValidationResponse(BaseContract):
    valid: bool = True
    name: str
    email: str
    company: str


class TrackingStatusUpdate(BaseContract):
    tracking_status: RequiredStr
