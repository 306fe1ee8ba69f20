"""Source resolver: pick the profile that seeds a new editing session."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from talent_profile.errors import ProfileEngineError, ProfileNotFoundError
from talent_profile.schemas.persisted_profile import PersistedProfile
from talent_profile.schemas.profile_draft import ProfileDraft
from talent_profile.schemas.session import SessionMode, SessionUser
from talent_profile.services.local_cache import ProfileCache
from talent_profile.services.profile_api import ProfileApiClient
from talent_profile.session.conversion import default_draft, draft_from_persisted
from talent_profile.utils.logger import get_logger

logger = get_logger(__name__)

NavigationPayload = Union[PersistedProfile, Mapping[str, Any]]


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving the initial draft."""

    mode: SessionMode
    draft: Optional[ProfileDraft] = None
    profile: Optional[PersistedProfile] = None
    source: str = "none"
    error: Optional[ProfileEngineError] = None


def validate_navigation_profile(payload: Optional[NavigationPayload]) -> Optional[PersistedProfile]:
    """Convert a navigation-supplied object into a PersistedProfile, or None if unusable."""
    if payload is None:
        return None
    if isinstance(payload, PersistedProfile):
        return payload
    try:
        return PersistedProfile.model_validate(payload)
    except ValidationError as e:
        logger.warning("Discarding invalid navigation profile: %s invalid fields", e.error_count())
        return None


async def resolve_initial_draft(
    api: ProfileApiClient,
    cache: Optional[ProfileCache],
    user: Optional[SessionUser],
    navigation_profile: Optional[NavigationPayload] = None,
    needs_creation: bool = False,
) -> Resolution:
    """
    Resolve the starting draft. First applicable source wins:
    navigation profile > (no identity: stay loading) > known-new user (cache, then defaults)
    > remote fetch (found: edit, 404: defaults in create mode, other failure: error).
    The cache is never read once a remote round trip has been made.
    """
    nav = validate_navigation_profile(navigation_profile)
    if nav is not None:
        logger.info("Seeding draft from navigation profile for user %s", nav.user_id)
        return Resolution(
            mode=SessionMode.EDIT_MODE,
            draft=draft_from_persisted(nav, user),
            profile=nav,
            source="navigation",
        )

    if user is None or not user.has_identity:
        logger.info("No authenticated user; profile resolution abandoned")
        return Resolution(mode=SessionMode.LOADING)

    if needs_creation:
        cached = cache.read_cache() if cache is not None else None
        if cached is not None:
            logger.info("Resuming cached draft for new profile of user %s", user.id)
            return Resolution(mode=SessionMode.CREATE_MODE, draft=cached, source="cache")
        logger.info("Seeding defaults for new profile of user %s", user.id)
        return Resolution(mode=SessionMode.CREATE_MODE, draft=default_draft(user), source="defaults")

    try:
        profile = await api.fetch_profile(user.id)
    except ProfileNotFoundError:
        logger.info("No profile on record for user %s; entering create mode", user.id)
        return Resolution(mode=SessionMode.CREATE_MODE, draft=default_draft(user), source="defaults")
    except ProfileEngineError as e:
        logger.error("Could not load profile for user %s: %s", user.id, e)
        return Resolution(mode=SessionMode.ERROR, error=e)

    return Resolution(
        mode=SessionMode.EDIT_MODE,
        draft=draft_from_persisted(profile, user),
        profile=profile,
        source="remote",
    )
