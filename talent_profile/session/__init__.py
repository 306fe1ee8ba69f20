"""Session exports."""

from .conversion import default_draft, draft_from_persisted, payload_from_draft
from .profile_session import ProfileSession
from .resolver import Resolution, resolve_initial_draft
from .save_coordinator import SaveCoordinator, SaveOutcome

__all__ = [
    "ProfileSession",
    "Resolution",
    "SaveCoordinator",
    "SaveOutcome",
    "default_draft",
    "draft_from_persisted",
    "payload_from_draft",
    "resolve_initial_draft",
]
