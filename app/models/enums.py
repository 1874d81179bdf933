"""
Enum definitions for status columns.
Uses (str, Enum) pattern so values serialize correctly in Pydantic.
"""

from enum import Enum


class IntentionStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ReferralStatus(str, Enum):
    NEW = "NEW"
    IN_CONTACT = "IN_CONTACT"
    NEGOTIATING = "NEGOTIATING"
    CLOSED = "CLOSED"
    REJECTED = "REJECTED"
