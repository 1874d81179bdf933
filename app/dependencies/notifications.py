"""
FastAPI dependency for the registration notifier (singleton).
"""

from functools import lru_cache

from app.services.interfaces.notifier import IRegistrationNotifier
from app.services.notifications import LoggingRegistrationNotifier


@lru_cache()
def _singleton() -> LoggingRegistrationNotifier:
    return LoggingRegistrationNotifier()


def get_registration_notifier() -> IRegistrationNotifier:
    return _singleton()
