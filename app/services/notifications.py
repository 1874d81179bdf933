"""
Delivery of registration links to approved candidates.
"""

import logging

from app.models.intentions import Intention
from app.services.interfaces.notifier import IRegistrationNotifier

logger = logging.getLogger(__name__)


class LoggingRegistrationNotifier(IRegistrationNotifier):
    """
    Writes the registration link to the application log instead of sending
    an e-mail. Swap for a mail-backed notifier in production.
    """

    def send_registration_link(self, intention: Intention, registration_link: str) -> None:
        logger.info(
            "Registration link for %s <%s> (%s): %s",
            intention.name,
            intention.email,
            intention.company,
            registration_link,
        )
        if intention.referred_by:
            logger.info("Intention %s was referred by member %s", intention.id, intention.referred_by)
