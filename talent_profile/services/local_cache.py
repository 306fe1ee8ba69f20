"""Local draft cache: a string key-value store plus a per-identity draft adapter."""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import ValidationError

from talent_profile.config import PROFILE_CACHE_KEY, PROFILE_CACHE_PATH
from talent_profile.schemas.profile_draft import ProfileDraft
from talent_profile.utils.logger import get_logger

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """String-keyed, string-valued storage the cache writes into."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStore(KeyValueStore):
    """Dict-backed store; lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore(KeyValueStore):
    """All keys kept in one JSON object on disk, so drafts survive a restart."""

    def __init__(self, path: Union[Path, str] = PROFILE_CACHE_PATH):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            # A corrupt file resets every key: the next set() rewrites it with only the new entry
            logger.warning("Cache file %s is unreadable, starting empty: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class ProfileCache:
    """
    Reads and writes one serialized ProfileDraft, scoped to a single profile identity.
    Writes replace the whole entry; there is no expiry.
    """

    def __init__(self, store: KeyValueStore, identity: Union[int, str], prefix: str = PROFILE_CACHE_KEY):
        self.store = store
        self.key = f"{prefix}:{identity}"

    def read_cache(self) -> Optional[ProfileDraft]:
        """Best-effort read. Missing or corrupt entries yield None and never raise."""
        raw = self.store.get(self.key)
        if raw is None:
            return None
        try:
            return ProfileDraft.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring corrupt cached draft under %s: %s", self.key, e.error_count())
            return None

    def write_cache(self, draft: ProfileDraft) -> None:
        self.store.set(self.key, draft.model_dump_json())
        logger.info("Cached draft under %s", self.key)
