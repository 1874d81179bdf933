"""
This module contains the base contracts for the application.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints

# Required text: surrounding whitespace is stripped and the result may not be empty
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class BaseContract(BaseModel):
    """
    A base contract for all contracts.
    """
    model_config = ConfigDict(from_attributes=True)

class TimestampedContract(BaseContract):
    """
    A base contract for records carrying created_at and updated_at.
    """
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
