"""
Service-level tests of the intention -> member lifecycle.
"""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.contracts.member import MemberUpdate
from app.core.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from app.models import Intention, Member
from app.services.crud import CRUDBase
from app.services.intentions.intention_service import IntentionService
from app.services.members.member_service import MemberService


def intention_service(db: AsyncSession, notifier) -> IntentionService:
    return IntentionService(db, get_settings(), notifier)


async def submit(service: IntentionService, email: str = "a@x.com"):
    return await service.submit(name="A", email=email, company="C", reason="R")


async def skip_lookup(self, **filters):
    return None


class TestSubmission:

    @pytest.mark.asyncio
    async def test_empty_field(self, db_session: AsyncSession, notifier):
        with pytest.raises(ValidationError):
            await intention_service(db_session, notifier).submit(
                name="A", email="", company="C", reason="R"
            )

    @pytest.mark.asyncio
    async def test_duplicate_email_creates_nothing(self, db_session: AsyncSession, notifier):
        service = intention_service(db_session, notifier)
        await submit(service)
        with pytest.raises(ConflictError):
            await submit(service, " A@x.com ")

        count = await db_session.scalar(select(func.count()).select_from(Intention))
        assert count == 1


    @pytest.mark.asyncio
    async def test_duplicate_caught_by_unique_constraint(
        self, db_session: AsyncSession, notifier, monkeypatch
    ):
        service = intention_service(db_session, notifier)
        await submit(service)
        monkeypatch.setattr(CRUDBase, "get_by", skip_lookup)

        with pytest.raises(ConflictError):
            await submit(service)

        count = await db_session.scalar(select(func.count()).select_from(Intention))
        assert count == 1


class TestApproval:

    @pytest.mark.asyncio
    async def test_exactly_one_active_member(self, db_session: AsyncSession, notifier):
        service = intention_service(db_session, notifier)
        intention = await submit(service)

        result = await service.approve(intention.id)

        members = (
            await db_session.execute(select(Member).where(Member.intention_id == intention.id))
        ).scalars().all()
        assert len(members) == 1
        assert members[0].is_active is True
        assert members[0].id == result.member.id
        assert result.intention.status == "APPROVED"

    @pytest.mark.asyncio
    async def test_terminal_states(self, db_session: AsyncSession, notifier):
        service = intention_service(db_session, notifier)
        approved = await submit(service, "a@x.com")
        rejected = await submit(service, "b@x.com")
        await service.approve(approved.id)
        await service.reject(rejected.id)

        for intention_id in (approved.id, rejected.id):
            for action in (service.approve, service.reject):
                with pytest.raises(InvalidStateError):
                    await action(intention_id)

        assert (await service.get(approved.id)).status == "APPROVED"
        assert (await service.get(rejected.id)).status == "REJECTED"
        assert (await service.get(rejected.id)).member is None

    @pytest.mark.asyncio
    async def test_stale_reader_loses_race(self, session_factory, notifier):
        async with session_factory() as first, session_factory() as second:
            intention = await submit(intention_service(first, notifier))

            # Loaded while still PENDING
            stale = await first.get(Intention, intention.id)
            assert stale.status == "PENDING"

            await intention_service(second, notifier).approve(intention.id)

            with pytest.raises(InvalidStateError):
                await intention_service(first, notifier).approve(intention.id)

            count = await second.scalar(
                select(func.count()).select_from(Member).where(Member.intention_id == intention.id)
            )
            assert count == 1

    @pytest.mark.asyncio
    async def test_placeholder_already_present(self, db_session: AsyncSession, notifier):
        service = intention_service(db_session, notifier)
        intention = await submit(service)
        db_session.add(Member(intention_id=intention.id, is_active=True))
        await db_session.commit()

        with pytest.raises(ConflictError):
            await service.approve(intention.id)
        assert (await service.get(intention.id)).status == "PENDING"
        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_placeholder_caught_by_unique_constraint(
        self, db_session: AsyncSession, notifier, monkeypatch
    ):
        service = intention_service(db_session, notifier)
        intention = await submit(service)
        db_session.add(Member(intention_id=intention.id, is_active=True))
        await db_session.commit()
        monkeypatch.setattr(CRUDBase, "get_by", skip_lookup)

        with pytest.raises(ConflictError):
            await service.approve(intention.id)

        count = await db_session.scalar(
            select(func.count()).select_from(Member).where(Member.intention_id == intention.id)
        )
        assert count == 1
        stored = await service.get(intention.id)
        assert stored.status == "PENDING"
        assert stored.token is None
        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_unknown_id(self, db_session: AsyncSession, notifier):
        with pytest.raises(NotFoundError):
            await intention_service(db_session, notifier).approve(uuid.uuid4())


class TestTokenRedemption:

    @pytest.mark.asyncio
    async def test_single_use(self, db_session: AsyncSession, notifier):
        service = intention_service(db_session, notifier)
        intention = await submit(service)
        token = (await service.approve(intention.id)).intention.token
        members = MemberService(db_session)

        assert (await service.validate_token(token)).valid is True

        member, created = await members.complete_registration(
            token, phone="123", profession="Dev", segment="Tech"
        )
        assert created is False
        assert member.profession == "Dev"

        with pytest.raises(ConflictError):
            await members.complete_registration(token, phone="9", profession="X", segment="Y")
        with pytest.raises(InvalidStateError):
            await service.validate_token(token)

        stored = await members.get(member.id)
        assert (stored.phone, stored.profession, stored.segment) == ("123", "Dev", "Tech")

    @pytest.mark.asyncio
    async def test_validation_precedes_token_lookup(self, db_session: AsyncSession):
        with pytest.raises(ValidationError):
            await MemberService(db_session).complete_registration(
                "whatever", phone="123", profession="", segment="Tech"
            )

    @pytest.mark.asyncio
    async def test_token_of_unapproved_intention(self, db_session: AsyncSession, notifier):
        service = intention_service(db_session, notifier)
        intention = await submit(service)
        row = await db_session.get(Intention, intention.id)
        row.token = "hand-set-token"
        await db_session.commit()

        with pytest.raises(InvalidStateError):
            await service.validate_token("hand-set-token")
        with pytest.raises(InvalidStateError):
            await MemberService(db_session).complete_registration(
                "hand-set-token", phone="1", profession="P", segment="S"
            )

    @pytest.mark.asyncio
    async def test_approved_without_placeholder_creates_member(self, db_session: AsyncSession):
        db_session.add(
            Intention(
                name="Legacy", email="legacy@x.com", company="C", reason="R",
                status="APPROVED", token="legacy-token",
            )
        )
        await db_session.commit()

        member, created = await MemberService(db_session).complete_registration(
            "legacy-token", phone="1", profession="P", segment="S"
        )
        assert created is True
        assert member.email == "legacy@x.com"


class TestProfileWrites:

    @pytest.mark.asyncio
    async def test_values_are_stripped(self, db_session: AsyncSession, notifier):
        service = intention_service(db_session, notifier)
        intention = await submit(service)
        token = (await service.approve(intention.id)).intention.token
        members = MemberService(db_session)

        member, _ = await members.complete_registration(
            token, phone=" 123 ", profession=" Dev ", segment="Tech ", linkedin=" https://li/x "
        )
        assert (member.phone, member.profession, member.segment) == ("123", "Dev", "Tech")
        assert member.linkedin == "https://li/x"

        edited = await members.complete_profile(
            member.id, phone=" 456", profession="Lead ", segment=" Tech"
        )
        assert (edited.phone, edited.profession, edited.segment) == ("456", "Lead", "Tech")
        assert edited.linkedin == "https://li/x"

    @pytest.mark.asyncio
    async def test_update_cannot_reopen_registration(self, db_session: AsyncSession, notifier):
        service = intention_service(db_session, notifier)
        intention = await submit(service)
        token = (await service.approve(intention.id)).intention.token
        members = MemberService(db_session)
        member, _ = await members.complete_registration(
            token, phone="123", profession="Dev", segment="Tech"
        )

        with pytest.raises(ValidationError):
            await members.update(member.id, MemberUpdate.model_construct(phone=" "))

        stored = await members.get(member.id)
        assert stored.profile_complete is True
        with pytest.raises(InvalidStateError):
            await service.validate_token(token)
