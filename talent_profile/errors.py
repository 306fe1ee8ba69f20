"""Error taxonomy for profile resolution and saving."""

from typing import Dict, Optional


class ProfileEngineError(Exception):
    """Base class for every failure the engine reports to its caller."""

    retryable: bool = False

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message or self.__class__.__name__)
        self.status_code = status_code


class ProfileNotFoundError(ProfileEngineError):
    """The remote service has no profile for this user (drives create mode)."""


class ProfileValidationError(ProfileEngineError):
    """The service rejected the payload (400). Draft is kept for correction."""

    def __init__(self, message: str = "", field_errors: Optional[Dict[str, str]] = None):
        super().__init__(message or "Profile payload was rejected", status_code=400)
        self.field_errors: Dict[str, str] = dict(field_errors or {})


class ProfileConflictError(ProfileEngineError):
    """A profile already exists for this user (409 on create)."""

    def __init__(self, message: str = ""):
        super().__init__(message or "Profile already exists", status_code=409)


class MissingIdentityError(ProfileEngineError):
    """No user id could be resolved for the save."""


class SaveInProgressError(ProfileEngineError):
    """Another save is still in flight for this session."""


class InvalidSessionModeError(ProfileEngineError):
    """Saving is only possible in create or edit mode."""


class SessionClosedError(ProfileEngineError):
    """The session was torn down before the remote call returned."""


class NetworkOrUnknownError(ProfileEngineError):
    """Transport failure, server error or an unexpected response."""

    retryable = True
