"""Editing session: owns one draft, its baseline, its mode and its cache key."""

from typing import Any, Callable, List, Optional

from talent_profile.errors import ProfileEngineError
from talent_profile.metrics.completion import completion_band, missing_required_fields
from talent_profile.schemas.persisted_profile import PersistedProfile
from talent_profile.schemas.profile_draft import ProfileDraft
from talent_profile.schemas.session import SessionMode, SessionUser
from talent_profile.services.local_cache import KeyValueStore, ProfileCache
from talent_profile.services.profile_api import ProfileApiClient
from talent_profile.session.conversion import default_draft
from talent_profile.session.resolver import NavigationPayload, Resolution, resolve_initial_draft
from talent_profile.session.save_coordinator import SaveCoordinator, SaveOutcome
from talent_profile.utils.logger import get_logger

logger = get_logger(__name__)


class ProfileSession:
    """
    One user's profile editing session.

    Until initialize() resolves, the draft is a placeholder seeded from defaults so that
    edits can happen while the fetch is pending; the resolved source then replaces it.
    Results that arrive after close() are dropped.
    """

    def __init__(
        self,
        api: ProfileApiClient,
        store: Optional[KeyValueStore],
        user: Optional[SessionUser] = None,
        on_save: Optional[Callable[[ProfileDraft], None]] = None,
    ):
        self.api = api
        self.store = store
        self.user = user
        self.on_save = on_save
        self.mode = SessionMode.LOADING
        self.error: Optional[ProfileEngineError] = None
        self.profile: Optional[PersistedProfile] = None
        self.source = "none"
        self.draft: ProfileDraft = default_draft(user)
        self.baseline: ProfileDraft = self.draft
        self.coordinator = SaveCoordinator(api, self._cache_for(user.id if user else None), user)
        self._live = True

    def _cache_for(self, identity: Optional[int]) -> Optional[ProfileCache]:
        if self.store is None or identity is None:
            return None
        return ProfileCache(self.store, identity)

    @property
    def is_live(self) -> bool:
        return self._live

    @property
    def is_dirty(self) -> bool:
        return self.draft != self.baseline

    @property
    def is_submitting(self) -> bool:
        return self.coordinator.is_submitting

    @property
    def total_experience(self) -> float:
        return self.draft.total_experience

    # The placeholder draft says nothing about a profile that failed to load
    @property
    def completion(self) -> Optional[int]:
        if self.mode is SessionMode.ERROR:
            return None
        return self.draft.completion

    @property
    def completion_band(self) -> Optional[str]:
        score = self.completion
        return None if score is None else completion_band(score)

    @property
    def missing_fields(self) -> List[str]:
        if self.mode is SessionMode.ERROR:
            return []
        return missing_required_fields(self.draft)

    async def initialize(
        self,
        navigation_profile: Optional[NavigationPayload] = None,
        needs_creation: bool = False,
    ) -> Resolution:
        resolution = await resolve_initial_draft(
            self.api,
            self.coordinator.cache,
            self.user,
            navigation_profile=navigation_profile,
            needs_creation=needs_creation,
        )
        if not self._live:
            logger.info("Session closed before profile resolution finished; result discarded")
            return resolution

        self.mode = resolution.mode
        self.error = resolution.error
        self.profile = resolution.profile
        self.source = resolution.source
        if resolution.draft is not None:
            self._reseed(resolution.draft)
        return resolution

    def _reseed(self, draft: ProfileDraft) -> None:
        self.draft = draft
        self.baseline = draft
        if draft.owner_id is not None:
            # Cache is scoped to the profile being edited, which may not be the signed-in user's
            self.coordinator.cache = self._cache_for(draft.owner_id)

    def update(self, **changes: Any) -> ProfileDraft:
        """Apply field edits and return the new draft. Invalid values raise ValidationError."""
        self.draft = self.draft.with_changes(**changes)
        return self.draft

    def discard_changes(self) -> ProfileDraft:
        self.draft = self.baseline
        return self.draft

    async def save(self) -> SaveOutcome:
        outcome = await self.coordinator.save(self.draft, self.mode, is_live=lambda: self._live)
        if not self._live:
            return outcome

        self.mode = outcome.mode
        if outcome.ok:
            self.error = None
            self.profile = outcome.profile
            self._reseed(outcome.draft)
            if self.on_save is not None:
                self.on_save(outcome.draft)
        else:
            self.error = outcome.error
        return outcome

    def close(self) -> None:
        self._live = False
