"""Schema exports."""

from .persisted_profile import PersistedProfile, ProfilePayload, ProfileUser
from .profile_draft import (
    EMPLOYEE_TYPES,
    EXPERIENCE_LEVELS,
    INDUSTRIES,
    IndustryExperience,
    ProfileDraft,
)
from .session import SessionMode, SessionUser

__all__ = [
    "EMPLOYEE_TYPES",
    "EXPERIENCE_LEVELS",
    "INDUSTRIES",
    "IndustryExperience",
    "PersistedProfile",
    "ProfileDraft",
    "ProfilePayload",
    "ProfileUser",
    "SessionMode",
    "SessionUser",
]
