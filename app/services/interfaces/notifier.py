from abc import abstractmethod

from app.models.intentions import Intention


class IRegistrationNotifier:
    @abstractmethod
    def send_registration_link(self, intention: Intention, registration_link: str) -> None:
        """Deliver the one-time registration link to an approved candidate."""
        pass
