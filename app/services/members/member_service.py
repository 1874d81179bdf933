"""
Member completion and administration.

Registration is completed in one of two ways:
- ``complete_registration``: redeems the one-time token minted at approval.
  Succeeds at most once per token.
- ``complete_profile``: keyed by member id, no one-time restriction. Used for
  profile edits after login and never consults the token.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.contracts.member import MemberLoginResponse, MemberResponse, MemberUpdate
from app.core.exceptions import (
    ConflictError,
    ForbiddenStateError,
    InvalidStateError,
    NotFoundError,
    require_fields,
)
from app.db.session import transaction
from app.models.enums import IntentionStatus
from app.models.intentions import Intention
from app.models.members import PROFILE_REQUIRED_FIELDS, Member
from app.services.crud import CRUDBase

logger = logging.getLogger(__name__)


def member_to_response(member: Member, intention: Optional[Intention] = None) -> MemberResponse:
    return MemberResponse(
        id=member.id,
        intention_id=member.intention_id,
        phone=member.phone,
        linkedin=member.linkedin,
        profession=member.profession,
        segment=member.segment,
        company_description=member.company_description,
        is_active=member.is_active,
        profile_complete=member.is_complete,
        joined_at=member.joined_at,
        updated_at=member.updated_at,
        name=intention.name if intention else None,
        email=intention.email if intention else None,
        company=intention.company if intention else None,
    )


def _clean(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else value


def _profile_incomplete():
    """SQL predicate matching members whose required profile is not filled in."""
    return or_(
        *[
            or_(getattr(Member, field).is_(None), getattr(Member, field) == "")
            for field in PROFILE_REQUIRED_FIELDS
        ]
    )


class MemberService:
    """Service for completing and administering member profiles."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.members = CRUDBase(Member, db)
        self.intentions = CRUDBase(Intention, db)

    async def complete_registration(
        self,
        token: str,
        phone: str,
        profession: str,
        segment: str,
        linkedin: Optional[str] = None,
        company_description: Optional[str] = None,
    ) -> Tuple[MemberResponse, bool]:
        """
        Fill in the placeholder member created at approval.

        Returns the member and whether a new row had to be created (only the
        case for intentions approved before placeholders existed).

        Raises:
            ValidationError: phone, profession or segment is empty
            InvalidStateError: token unknown or its intention is not approved
            ConflictError: registration for this token was already completed
        """
        require_fields(phone=phone, profession=profession, segment=segment)
        profile = {
            "phone": phone.strip(),
            "profession": profession.strip(),
            "segment": segment.strip(),
            "linkedin": _clean(linkedin),
            "company_description": _clean(company_description),
        }

        async with transaction(self.db):
            intention = await self.intentions.get_by(token=token) if token else None
            if not intention or intention.status != IntentionStatus.APPROVED:
                raise InvalidStateError("Invalid token or intention not approved")

            member = await self.members.get_by(intention_id=intention.id)
            created = member is None
            if created:
                try:
                    member = await self.members.create(
                        {"intention_id": intention.id, "is_active": True, **profile}
                    )
                except IntegrityError as e:
                    raise ConflictError("Registration already completed") from e
            else:
                if member.is_complete:
                    raise ConflictError("Registration already completed")
                # Guarded write: a concurrent redemption that got here first wins
                result = await self.db.execute(
                    update(Member)
                    .where(Member.id == member.id, _profile_incomplete())
                    .values(**profile)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    raise ConflictError("Registration already completed")

        await self.db.refresh(member)
        logger.info("Member %s completed registration for intention %s", member.id, intention.id)
        return member_to_response(member, intention), created

    async def complete_profile(
        self,
        member_id: UUID,
        phone: str,
        profession: str,
        segment: str,
        linkedin: Optional[str] = None,
        company_description: Optional[str] = None,
    ) -> MemberResponse:
        """
        Optional fields left as None keep their stored value.
        """
        require_fields(phone=phone, profession=profession, segment=segment)
        changes = {
            "phone": phone.strip(),
            "profession": profession.strip(),
            "segment": segment.strip(),
        }
        for field, value in (("linkedin", linkedin), ("company_description", company_description)):
            if value is not None:
                changes[field] = _clean(value)

        async with transaction(self.db):
            member = await self._get_member(member_id)
            await self.members.update(member, changes)

        await self.db.refresh(member)
        return member_to_response(member, await self.intentions.get(member.intention_id))

    async def login(self, email: str) -> MemberLoginResponse:
        """
        Resolve an approved member by e-mail.

        Raises:
            NotFoundError: no approved intention or no member for it
            ForbiddenStateError: the member has been deactivated
        """
        require_fields(email=email)
        result = await self.db.execute(
            select(Intention).where(
                Intention.email == email.strip().lower(),
                Intention.status == IntentionStatus.APPROVED.value,
            )
        )
        intention = result.scalars().first()
        if not intention:
            raise NotFoundError("Member not found or intention not approved")

        member = await self.members.get_by(intention_id=intention.id)
        if not member:
            raise NotFoundError("Member registration not found; complete your registration first")
        if not member.is_active:
            raise ForbiddenStateError("This account is inactive; contact the administrator")

        return MemberLoginResponse(
            needs_completion=not member.is_complete,
            member=member_to_response(member, intention),
        )

    async def list(self, is_active: Optional[bool] = None) -> List[MemberResponse]:
        query = select(Member, Intention).join(Intention, Member.intention_id == Intention.id)
        if is_active is not None:
            query = query.where(Member.is_active == is_active)
        query = query.order_by(Member.joined_at.desc())

        result = await self.db.execute(query)
        return [member_to_response(m, i) for m, i in result.all()]

    async def get(self, member_id: UUID) -> MemberResponse:
        member = await self._get_member(member_id)
        return member_to_response(member, await self.intentions.get(member.intention_id))

    async def update(self, member_id: UUID, payload: MemberUpdate) -> MemberResponse:
        """
        Partial admin edit. Required profile fields can be changed but not
        blanked, so a completed registration never reopens its token.
        """
        changes = {field: _clean(value) for field, value in payload.model_dump(exclude_unset=True).items()}
        require_fields(**{f: changes[f] for f in PROFILE_REQUIRED_FIELDS if f in changes})

        async with transaction(self.db):
            member = await self._get_member(member_id)
            await self.members.update(member, changes)

        await self.db.refresh(member)
        return member_to_response(member, await self.intentions.get(member.intention_id))

    async def deactivate(self, member_id: UUID) -> MemberResponse:
        """Soft delete: the row stays so referral history keeps its references."""
        async with transaction(self.db):
            member = await self._get_member(member_id)
            await self.members.update(member, {"is_active": False})

        await self.db.refresh(member)
        logger.info("Member %s deactivated", member.id)
        return member_to_response(member, await self.intentions.get(member.intention_id))

    async def _get_member(self, member_id: UUID) -> Member:
        member = await self.members.get(member_id)
        if not member:
            raise NotFoundError("Member not found")
        return member
