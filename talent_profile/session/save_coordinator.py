"""Save coordinator: persist a draft remotely, then write through to the local cache."""

from dataclasses import dataclass
from typing import Callable, Optional

from talent_profile.errors import (
    InvalidSessionModeError,
    MissingIdentityError,
    ProfileConflictError,
    ProfileEngineError,
    SaveInProgressError,
    SessionClosedError,
)
from talent_profile.schemas.persisted_profile import PersistedProfile
from talent_profile.schemas.profile_draft import ProfileDraft
from talent_profile.schemas.session import SessionMode, SessionUser
from talent_profile.services.local_cache import ProfileCache
from talent_profile.services.profile_api import ProfileApiClient
from talent_profile.session.conversion import draft_from_persisted, payload_from_draft
from talent_profile.utils.logger import get_logger

logger = get_logger(__name__)

SAVEABLE_MODES = (SessionMode.CREATE_MODE, SessionMode.EDIT_MODE)


@dataclass(frozen=True)
class SaveOutcome:
    """
    Result of one save attempt.
    draft is what the session should hold next: the re-seeded saved profile on success,
    the untouched input draft on failure. mode is the session's next mode.
    """

    mode: SessionMode
    draft: ProfileDraft
    profile: Optional[PersistedProfile] = None
    error: Optional[ProfileEngineError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SaveCoordinator:
    """Dispatches create vs update and allows a single save in flight."""

    def __init__(
        self,
        api: ProfileApiClient,
        cache: Optional[ProfileCache] = None,
        user: Optional[SessionUser] = None,
    ):
        self.api = api
        self.cache = cache
        self.user = user
        self.is_submitting = False

    def resolve_user_id(self, draft: ProfileDraft) -> Optional[int]:
        if draft.owner_id is not None:
            return draft.owner_id
        return self.user.id if self.user is not None else None

    async def save(
        self,
        draft: ProfileDraft,
        mode: SessionMode,
        is_live: Optional[Callable[[], bool]] = None,
    ) -> SaveOutcome:
        if is_live is not None and not is_live():
            logger.info("Save requested on a closed session; nothing sent")
            return SaveOutcome(mode=mode, draft=draft, error=SessionClosedError("Session is closed"))
        if self.is_submitting:
            logger.warning("Save rejected: another save is still in flight")
            return SaveOutcome(mode=mode, draft=draft, error=SaveInProgressError("A save is already in progress"))
        if mode not in SAVEABLE_MODES:
            return SaveOutcome(
                mode=mode,
                draft=draft,
                error=InvalidSessionModeError(f"Cannot save while session is {mode.value}"),
            )
        user_id = self.resolve_user_id(draft)
        if user_id is None:
            logger.error("Save rejected: no user id on the draft or the session")
            return SaveOutcome(mode=mode, draft=draft, error=MissingIdentityError("User not found"))

        self.is_submitting = True
        try:
            payload = payload_from_draft(draft, user_id)
            try:
                if mode is SessionMode.CREATE_MODE:
                    profile = await self.api.create_profile(user_id, payload)
                else:
                    profile = await self.api.update_profile(user_id, payload)
            except ProfileConflictError as e:
                # Profile already exists: continue in the edit flow rather than retrying create
                logger.warning("Create for user %s hit an existing profile; switching to edit", user_id)
                return SaveOutcome(mode=SessionMode.EDIT_MODE, draft=draft, error=e)
            except ProfileEngineError as e:
                logger.error("Saving profile for user %s failed: %s", user_id, e)
                return SaveOutcome(mode=mode, draft=draft, error=e)

            if is_live is not None and not is_live():
                logger.info("Session closed during save for user %s; result discarded", user_id)
                return SaveOutcome(mode=mode, draft=draft, error=SessionClosedError("Session closed during save"))

            saved = draft_from_persisted(profile, self.user)
            if self.cache is not None:
                self.cache.write_cache(saved)
            logger.info(
                "Profile %s for user %s (total experience %s, completion %s%%)",
                "created" if mode is SessionMode.CREATE_MODE else "updated",
                user_id,
                saved.total_experience,
                saved.completion,
            )
            return SaveOutcome(mode=SessionMode.EDIT_MODE, draft=saved, profile=profile)
        finally:
            self.is_submitting = False
