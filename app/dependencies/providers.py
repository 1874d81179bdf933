"""
This module contains the service provider dependencies.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.dependencies.notifications import get_registration_notifier
from app.dependencies.db import get_db
from app.services.intentions.intention_service import IntentionService
from app.services.interfaces.notifier import IRegistrationNotifier
from app.services.members.member_service import MemberService
from app.services.referrals.referral_service import ReferralService


def get_intention_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    notifier: IRegistrationNotifier = Depends(get_registration_notifier),
) -> IntentionService:
    """Get intention service instance"""
    return IntentionService(db, settings, notifier)


def get_member_service(db: AsyncSession = Depends(get_db)) -> MemberService:
    """Get member service instance"""
    return MemberService(db)


def get_referral_service(
    db: AsyncSession = Depends(get_db),
    intention_service: IntentionService = Depends(get_intention_service),
) -> ReferralService:
    """Get referral service instance"""
    return ReferralService(db, intention_service)
