"""
Member model — maps to the members table.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, relationship

from .base import Base

PROFILE_REQUIRED_FIELDS = ("phone", "profession", "segment")


class Member(Base):
    __tablename__ = "members"

    id: Mapped[uuid.UUID] = Column(Uuid, primary_key=True, default=uuid.uuid4)
    intention_id: Mapped[uuid.UUID] = Column(
        Uuid, ForeignKey("intentions.id"), nullable=False, unique=True
    )
    # Profile fields stay empty until registration is completed
    phone: Mapped[Optional[str]] = Column(Text, nullable=True)
    linkedin: Mapped[Optional[str]] = Column(Text, nullable=True)
    profession: Mapped[Optional[str]] = Column(Text, nullable=True)
    segment: Mapped[Optional[str]] = Column(Text, nullable=True)
    company_description: Mapped[Optional[str]] = Column(Text, nullable=True)
    is_active: Mapped[bool] = Column(Boolean, nullable=False, default=True)
    joined_at: Mapped[Optional[datetime]] = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[Optional[datetime]] = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    intention: Mapped["Intention"] = relationship("Intention", foreign_keys=[intention_id])

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, field) for field in PROFILE_REQUIRED_FIELDS)
