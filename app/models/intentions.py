"""
Intention model — maps to the intentions table.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Text, Uuid
from sqlalchemy.orm import Mapped

from .base import Base
from .enums import IntentionStatus


class Intention(Base):
    __tablename__ = "intentions"

    id: Mapped[uuid.UUID] = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = Column(Text, nullable=False)
    email: Mapped[str] = Column(Text, nullable=False, unique=True)
    company: Mapped[str] = Column(Text, nullable=False)
    reason: Mapped[str] = Column(Text, nullable=False)
    status: Mapped[str] = Column(
        Text, nullable=False, default=IntentionStatus.PENDING.value
    )
    # Assigned once, at approval
    token: Mapped[Optional[str]] = Column(Text, nullable=True, unique=True)
    # Member who proposed this intention, if any
    referred_by: Mapped[Optional[uuid.UUID]] = Column(Uuid, nullable=True, index=True)
    tracking_status: Mapped[Optional[str]] = Column(Text, nullable=True)
    created_at: Mapped[Optional[datetime]] = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[Optional[datetime]] = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
