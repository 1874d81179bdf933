"""
Referral model — maps to the referrals table.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, relationship

from .base import Base
from .enums import ReferralStatus


class Referral(Base):
    __tablename__ = "referrals"

    id: Mapped[uuid.UUID] = Column(Uuid, primary_key=True, default=uuid.uuid4)
    giver_id: Mapped[uuid.UUID] = Column(Uuid, ForeignKey("members.id"), nullable=False)
    receiver_id: Mapped[uuid.UUID] = Column(Uuid, ForeignKey("members.id"), nullable=False)
    company_name: Mapped[str] = Column(Text, nullable=False)
    contact_name: Mapped[str] = Column(Text, nullable=False)
    contact_info: Mapped[str] = Column(Text, nullable=False)
    opportunity: Mapped[str] = Column(Text, nullable=False)
    status: Mapped[str] = Column(Text, nullable=False, default=ReferralStatus.NEW.value)
    created_at: Mapped[Optional[datetime]] = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[Optional[datetime]] = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    giver: Mapped["Member"] = relationship("Member", foreign_keys=[giver_id])
    receiver: Mapped["Member"] = relationship("Member", foreign_keys=[receiver_id])
