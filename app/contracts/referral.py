"""
Contracts for business referrals.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import field_validator

from app.models.enums import ReferralStatus

from .base import BaseContract, RequiredStr


class ReferralCreate(BaseContract):
    giver_id: UUID
    receiver_id: UUID
    company_name: RequiredStr
    contact_name: RequiredStr
    contact_info: RequiredStr
    opportunity: RequiredStr


class ReferralUpdate(BaseContract):
    company_name: Optional[RequiredStr] = None
    contact_name: Optional[RequiredStr] = None
    contact_info: Optional[RequiredStr] = None
    opportunity: Optional[RequiredStr] = None
    status: Optional[ReferralStatus] = None

    @field_validator("company_name", "contact_name", "contact_info", "opportunity", "status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("cannot be cleared")
        return value


class ReferralStatusUpdate(BaseContract):
    status: ReferralStatus


class ReferralResponse(BaseContract):
    id: UUID
    giver_id: UUID
    receiver_id: UUID
    company_name: str
    contact_name: str
    contact_info: str
    opportunity: str
    status: ReferralStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # Joined fields
    giver_name: Optional[str] = None
    receiver_name: Optional[str] = None
