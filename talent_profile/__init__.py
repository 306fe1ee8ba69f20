"""Employee profile reconciliation engine: source resolution, derived metrics, saving."""

from .errors import (
    InvalidSessionModeError,
    MissingIdentityError,
    NetworkOrUnknownError,
    ProfileConflictError,
    ProfileEngineError,
    ProfileNotFoundError,
    ProfileValidationError,
    SaveInProgressError,
    SessionClosedError,
)
from .schemas import IndustryExperience, PersistedProfile, ProfileDraft, SessionMode, SessionUser
from .services import InMemoryStore, JsonFileStore, ProfileApiClient, ProfileCache
from .session import ProfileSession, SaveCoordinator, SaveOutcome, resolve_initial_draft

__all__ = [
    "IndustryExperience",
    "InMemoryStore",
    "InvalidSessionModeError",
    "JsonFileStore",
    "MissingIdentityError",
    "NetworkOrUnknownError",
    "PersistedProfile",
    "ProfileApiClient",
    "ProfileCache",
    "ProfileConflictError",
    "ProfileDraft",
    "ProfileEngineError",
    "ProfileNotFoundError",
    "ProfileSession",
    "ProfileValidationError",
    "SaveCoordinator",
    "SaveInProgressError",
    "SaveOutcome",
    "SessionClosedError",
    "SessionMode",
    "SessionUser",
    "resolve_initial_draft",
]
