"""Domain error taxonomy shared by the backend functions and the portal."""


class PunchEaseError(Exception):
    """Base class for all PunchEase errors."""


class MalformedRequest(PunchEaseError):
    """A required field was missing or the payload could not be parsed."""


class NotFound(PunchEaseError):
    """A slug or username has no matching record."""


class InvalidCredential(PunchEaseError):
    """Submitted credentials did not match."""


class DatabaseFault(PunchEaseError):
    """The backend failed to answer; the caller may retry."""


class ConfigurationError(PunchEaseError):
    """Programming-time defect, e.g. a context consumed outside its provider."""


class BootstrapStepError(PunchEaseError):
    """One step of the superadmin bootstrap failed.

    Earlier steps are not rolled back; ``step`` names the one that failed so
    the operator can reconcile by hand.
    """

    def __init__(self, step: str, message: str) -> None:
        super().__init__(message)
        self.step = step
        self.message = message


class Conflict(PunchEaseError):
    """A unique value (email, slug, tenant username) is already taken."""
