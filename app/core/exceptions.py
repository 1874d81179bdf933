"""
Domain errors raised by the membership workflow.

Every failure is a definitive outcome for the caller; none of these is
retried internally. The HTTP layer maps ``status_code`` onto the response.
"""


class MembershipError(Exception):
    """Base class for expected workflow failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MembershipError):
    """A required field is missing or empty."""

    status_code = 400


class ConflictError(MembershipError):
    """A uniqueness rule was violated (email, token, completed registration)."""

    status_code = 409


class InvalidStateError(MembershipError):
    """The record is not in the state the operation requires."""

    status_code = 400


class ForbiddenStateError(InvalidStateError):
    """The record exists but is deactivated."""

    status_code = 403


class NotFoundError(MembershipError):
    """The id or token does not resolve to a record."""

    status_code = 404


def require_fields(**fields) -> None:
    """
    Raise ValidationError naming every empty field.
    """
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
