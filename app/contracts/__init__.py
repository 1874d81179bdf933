"""
This module contains the contracts for the application.
"""

from .base import BaseContract, RequiredStr, TimestampedContract
from .member import (
    MemberLoginRequest,
    MemberLoginResponse,
    MemberProfile,
    MemberResponse,
    MemberUpdate,
)
from .intention import (
    ApprovalResponse,
    IntentionCreate,
    IntentionMemberSummary,
    IntentionResponse,
    PublicIntentionResponse,
    TokenValidationResponse,
    TrackingStatusUpdate,
)
from .referral import ReferralCreate, ReferralResponse, ReferralStatusUpdate, ReferralUpdate
