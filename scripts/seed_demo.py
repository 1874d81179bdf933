"""
Demo Seed Script - Create tables and a few completed members

Creates the schema (if missing) and inserts approved intentions with
completed member profiles plus one business referral between them, so the
dashboards have something to show. Rows whose e-mail already exists are
skipped, so the script can be re-run.

Usage:
    python scripts/seed_demo.py

Environment Variables Required:
    DATABASE_URL - SQLAlchemy async URL (postgresql+asyncpg://... or sqlite+aiosqlite:///...)
"""

import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

load_dotenv()

from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from app.db.session import build_engine, transaction  # noqa: E402
from app.models import Base, Intention, IntentionStatus, Member, Referral, ReferralStatus  # noqa: E402

DEMO_MEMBERS = [
    {
        "intention": {
            "name": "Demo Member",
            "email": "demo@member.com",
            "company": "Tech Solutions",
            "reason": "Grow my network and find new business",
        },
        "profile": {
            "phone": "+55 11 98765-4321",
            "linkedin": "https://linkedin.com/in/demo",
            "profession": "Full Stack Developer",
            "segment": "Information Technology",
            "company_description": "Web and mobile development studio",
        },
    },
    {
        "intention": {
            "name": "Maria Santos",
            "email": "maria@company.com",
            "company": "Marketing Pro",
            "reason": "Networking",
        },
        "profile": {
            "phone": "+55 11 91234-5678",
            "profession": "Marketing Manager",
            "segment": "Digital Marketing",
        },
    },
]


async def seed(db: AsyncSession) -> None:
    member_ids = []
    for entry in DEMO_MEMBERS:
        email = entry["intention"]["email"]
        existing = (
            await db.execute(select(Intention).where(Intention.email == email))
        ).scalars().first()
        if existing:
            print(f"  Skipped (exists): {email}")
            member = (
                await db.execute(select(Member).where(Member.intention_id == existing.id))
            ).scalars().first()
            if member:
                member_ids.append(member.id)
            continue

        async with transaction(db):
            intention = Intention(**entry["intention"], status=IntentionStatus.APPROVED.value)
            db.add(intention)
            await db.flush()
            member = Member(intention_id=intention.id, is_active=True, **entry["profile"])
            db.add(member)
            await db.flush()
            member_ids.append(member.id)
        print(f"  Created member: {email}")

    if len(member_ids) >= 2:
        has_referral = (
            await db.execute(select(Referral).where(Referral.giver_id == member_ids[0]))
        ).scalars().first()
        if not has_referral:
            async with transaction(db):
                db.add(
                    Referral(
                        giver_id=member_ids[0],
                        receiver_id=member_ids[1],
                        company_name="Acme Retail",
                        contact_name="Carlos Oliveira",
                        contact_info="carlos@acme.com",
                        opportunity="E-commerce relaunch campaign",
                        status=ReferralStatus.NEW.value,
                    )
                )
            print("  Created demo referral")


async def main() -> None:
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        print("ERROR: DATABASE_URL is not set")
        sys.exit(1)

    engine = build_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        print("Schema ready")

        session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        async with session_factory() as db:
            await seed(db)
    finally:
        await engine.dispose()

    print("\nSeed complete.")


if __name__ == "__main__":
    asyncio.run(main())
