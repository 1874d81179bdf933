from .base import Base

# Enums
from .enums import IntentionStatus, ReferralStatus

# Tier 1
from .intentions import Intention

# Tier 2
from .members import Member

# Tier 3
from .referrals import Referral
