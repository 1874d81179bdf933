"""
Business referrals between members, and members proposing new intentions.
"""

import logging
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.contracts.intention import PublicIntentionResponse
from app.contracts.referral import ReferralCreate, ReferralResponse, ReferralUpdate
from app.core.exceptions import NotFoundError, ValidationError
from app.db.session import transaction
from app.models.enums import ReferralStatus
from app.models.intentions import Intention
from app.models.members import Member
from app.models.referrals import Referral
from app.services.crud import CRUDBase
from app.services.intentions.intention_service import IntentionService

logger = logging.getLogger(__name__)

REFERRAL_DIRECTIONS = ("given", "received")


class ReferralService:
    """Service for referrals; new-member referrals go through the intention registry."""

    def __init__(self, db: AsyncSession, intention_service: IntentionService):
        self.db = db
        self.intention_service = intention_service
        self.referrals = CRUDBase(Referral, db)
        self.members = CRUDBase(Member, db)

    async def refer(
        self,
        giver_id: UUID,
        name: str,
        email: str,
        company: str,
        reason: str,
    ) -> PublicIntentionResponse:
        """
        Submit an intention on someone's behalf. Same rules as a public
        submission; ``referred_by`` is recorded and has no other effect.
        """
        if not await self.members.get(giver_id):
            raise NotFoundError("Member not found")

        intention = await self.intention_service.submit(
            name=name,
            email=email,
            company=company,
            reason=reason,
            referred_by=giver_id,
        )
        logger.info("Member %s referred %s for membership", giver_id, intention.email)
        return intention

    async def create(self, payload: ReferralCreate) -> ReferralResponse:
        async with transaction(self.db):
            for member_id in (payload.giver_id, payload.receiver_id):
                if not await self.members.get(member_id):
                    raise NotFoundError("Member not found")
            referral = await self.referrals.create(
                {**payload.model_dump(), "status": ReferralStatus.NEW.value}
            )

        await self.db.refresh(referral)
        return (await self._to_responses([referral]))[0]

    async def list(self, status: Optional[ReferralStatus] = None) -> List[ReferralResponse]:
        referrals = await self.referrals.get_multi(
            filters={"status": ReferralStatus(status).value if status else None}
        )
        return await self._to_responses(referrals)

    async def list_by_member(self, member_id: UUID, direction: Optional[str] = None) -> List[ReferralResponse]:
        if direction is not None and direction not in REFERRAL_DIRECTIONS:
            raise ValidationError("type must be 'given' or 'received'")

        query = select(Referral)
        if direction == "given":
            query = query.where(Referral.giver_id == member_id)
        elif direction == "received":
            query = query.where(Referral.receiver_id == member_id)
        else:
            query = query.where(or_(Referral.giver_id == member_id, Referral.receiver_id == member_id))
        query = query.order_by(Referral.created_at.desc())

        result = await self.db.execute(query)
        return await self._to_responses(result.scalars().all())

    async def get(self, referral_id: UUID) -> ReferralResponse:
        referral = await self.referrals.get(referral_id)
        if not referral:
            raise NotFoundError("Referral not found")
        return (await self._to_responses([referral]))[0]

    async def update_status(self, referral_id: UUID, status: ReferralStatus) -> ReferralResponse:
        async with transaction(self.db):
            referral = await self.referrals.get(referral_id)
            if not referral:
                raise NotFoundError("Referral not found")
            await self.referrals.update(referral, {"status": ReferralStatus(status).value})

        await self.db.refresh(referral)
        return (await self._to_responses([referral]))[0]

    async def update(self, referral_id: UUID, payload: ReferralUpdate) -> ReferralResponse:
        changes = {
            field: value.strip() if isinstance(value, str) else value
            for field, value in payload.model_dump(exclude_unset=True).items()
        }
        if "status" in changes:
            changes["status"] = ReferralStatus(changes["status"]).value

        async with transaction(self.db):
            referral = await self.referrals.get(referral_id)
            if not referral:
                raise NotFoundError("Referral not found")
            await self.referrals.update(referral, changes)

        await self.db.refresh(referral)
        return (await self._to_responses([referral]))[0]

    async def delete(self, referral_id: UUID) -> None:
        async with transaction(self.db):
            if not await self.referrals.delete(referral_id):
                raise NotFoundError("Referral not found")
        logger.info("Referral %s deleted", referral_id)

    async def _member_names(self, member_ids: Iterable[UUID]) -> Dict[UUID, str]:
        ids = set(member_ids)
        if not ids:
            return {}
        result = await self.db.execute(
            select(Member.id, Intention.name)
            .join(Intention, Member.intention_id == Intention.id)
            .where(Member.id.in_(ids))
        )
        return {member_id: name for member_id, name in result.all()}

    async def _to_responses(self, referrals: Iterable[Referral]) -> List[ReferralResponse]:
        referrals = list(referrals)
        names = await self._member_names(
            [r.giver_id for r in referrals] + [r.receiver_id for r in referrals]
        )
        responses = []
        for referral in referrals:
            response = ReferralResponse.model_validate(referral)
            response.giver_name = names.get(referral.giver_id)
            response.receiver_name = names.get(referral.receiver_id)
            responses.append(response)
        return responses
