"""
Intention registry: public submissions, admin review and token issuing.

Handles:
- Accepting intentions to join (e-mail unique across all intentions)
- Listing and filtering for administrators
- Approving, which mints a one-time registration token and creates a
  placeholder member in the same transaction
- Rejecting
- Validating registration tokens before the sign-up form is shown

PENDING is the only state that accepts a transition. APPROVED and REJECTED
are terminal.
"""

import logging
import secrets
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.contracts.intention import (
    ApprovalResponse,
    IntentionMemberSummary,
    IntentionResponse,
    PublicIntentionResponse,
    TokenValidationResponse,
)
from app.core.exceptions import ConflictError, InvalidStateError, NotFoundError, require_fields
from app.db.session import transaction
from app.models.enums import IntentionStatus
from app.models.intentions import Intention
from app.models.members import Member
from app.services.crud import CRUDBase
from app.services.interfaces.notifier import IRegistrationNotifier
from app.services.members.member_service import member_to_response

logger = logging.getLogger(__name__)

# 32 random bytes -> 43 url-safe characters
TOKEN_BYTES = 32


def generate_registration_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


class IntentionService:
    """Service for the intention lifecycle."""

    def __init__(self, db: AsyncSession, settings: Settings, notifier: IRegistrationNotifier):
        self.db = db
        self.settings = settings
        self.notifier = notifier
        self.intentions = CRUDBase(Intention, db)
        self.members = CRUDBase(Member, db)

    async def submit(
        self,
        name: str,
        email: str,
        company: str,
        reason: str,
        referred_by: Optional[UUID] = None,
    ) -> PublicIntentionResponse:
        """
        Record a new intention in PENDING.

        Raises:
            ValidationError: any field is empty
            ConflictError: an intention with this e-mail already exists, whatever its status
        """
        require_fields(name=name, email=email, company=company, reason=reason)
        email = email.strip().lower()

        async with transaction(self.db):
            if await self.intentions.get_by(email=email):
                raise ConflictError("An intention with this email already exists")
            try:
                intention = await self.intentions.create(
                    {
                        "name": name.strip(),
                        "email": email,
                        "company": company.strip(),
                        "reason": reason.strip(),
                        "status": IntentionStatus.PENDING.value,
                        "referred_by": referred_by,
                    }
                )
            except IntegrityError as e:
                # Lost a race against a concurrent submission with the same e-mail
                logger.warning("Duplicate intention email rejected by constraint: %s", email)
                raise ConflictError("An intention with this email already exists") from e

        return PublicIntentionResponse.model_validate(intention)

    async def list(
        self,
        status: Optional[IntentionStatus] = None,
        referred_by: Optional[UUID] = None,
    ) -> List[IntentionResponse]:
        query = select(Intention, Member).outerjoin(Member, Member.intention_id == Intention.id)
        if status:
            query = query.where(Intention.status == IntentionStatus(status).value)
        if referred_by:
            query = query.where(Intention.referred_by == referred_by)
        query = query.order_by(Intention.created_at.desc())

        result = await self.db.execute(query)
        return [self._to_response(i, m) for i, m in result.all()]

    async def get(self, intention_id: UUID) -> IntentionResponse:
        result = await self.db.execute(
            select(Intention, Member)
            .outerjoin(Member, Member.intention_id == Intention.id)
            .where(Intention.id == intention_id)
        )
        row = result.first()
        if not row:
            raise NotFoundError("Intention not found")
        return self._to_response(*row)

    async def approve(self, intention_id: UUID) -> ApprovalResponse:
        """
        Approve a pending intention.

        Status change, token assignment and placeholder member creation
        commit together or not at all.

        Raises:
            NotFoundError: unknown id
            InvalidStateError: intention is not PENDING (includes losing a concurrent approval)
            ConflictError: a member already exists for the intention
        """
        async with transaction(self.db):
            intention = await self._get_pending(intention_id, "approved")

            if await self.members.get_by(intention_id=intention.id):
                raise ConflictError("A member already exists for this intention")

            token = generate_registration_token()
            try:
                result = await self.db.execute(
                    update(Intention)
                    .where(
                        Intention.id == intention.id,
                        Intention.status == IntentionStatus.PENDING.value,
                    )
                    .values(status=IntentionStatus.APPROVED.value, token=token)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    raise InvalidStateError("Only pending intentions can be approved")

                member = await self.members.create({"intention_id": intention.id, "is_active": True})
            except IntegrityError as e:
                logger.warning("Approval of intention %s hit a unique constraint: %s", intention.id, e)
                raise ConflictError("A member already exists for this intention") from e

        await self.db.refresh(intention)
        await self.db.refresh(member)

        registration_link = self.settings.registration_link(token)
        logger.info("Intention %s approved; member %s created", intention.id, member.id)
        self.notifier.send_registration_link(intention, registration_link)

        return ApprovalResponse(
            intention=self._to_response(intention, member),
            member=member_to_response(member, intention),
            registration_link=registration_link,
        )

    async def reject(self, intention_id: UUID) -> IntentionResponse:
        async with transaction(self.db):
            intention = await self._get_pending(intention_id, "rejected")
            result = await self.db.execute(
                update(Intention)
                .where(
                    Intention.id == intention.id,
                    Intention.status == IntentionStatus.PENDING.value,
                )
                .values(status=IntentionStatus.REJECTED.value)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise InvalidStateError("Only pending intentions can be rejected")

        await self.db.refresh(intention)
        logger.info("Intention %s rejected", intention.id)
        return self._to_response(intention, None)

    async def validate_token(self, token: str) -> TokenValidationResponse:
        """
        Check a registration token without spending it.

        Raises:
            NotFoundError: no intention holds this token
            InvalidStateError: intention not approved, or registration already completed
        """
        intention = await self.intentions.get_by(token=token) if token else None
        if not intention:
            raise NotFoundError("Invalid token")
        if intention.status != IntentionStatus.APPROVED:
            raise InvalidStateError("This intention is not approved")

        member = await self.members.get_by(intention_id=intention.id)
        if member and member.is_complete:
            raise InvalidStateError("This token has already been used")

        return TokenValidationResponse(
            name=intention.name,
            email=intention.email,
            company=intention.company,
        )

    async def update_tracking_status(self, intention_id: UUID, tracking_status: str) -> PublicIntentionResponse:
        """Set the free-form follow-up status; the review status is untouched."""
        require_fields(tracking_status=tracking_status)
        async with transaction(self.db):
            intention = await self.intentions.get(intention_id)
            if not intention:
                raise NotFoundError("Intention not found")
            await self.intentions.update(intention, {"tracking_status": tracking_status})

        await self.db.refresh(intention)
        return PublicIntentionResponse.model_validate(intention)

    async def _get_pending(self, intention_id: UUID, action: str) -> Intention:
        intention = await self.intentions.get(intention_id)
        if not intention:
            raise NotFoundError("Intention not found")
        if intention.status != IntentionStatus.PENDING:
            raise InvalidStateError(f"Only pending intentions can be {action}")
        return intention

    @staticmethod
    def _to_response(intention: Intention, member: Optional[Member]) -> IntentionResponse:
        response = IntentionResponse.model_validate(intention)
        if member is not None:
            response.member = IntentionMemberSummary.model_validate(member)
        return response
