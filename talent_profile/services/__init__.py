"""Service exports."""

from .local_cache import InMemoryStore, JsonFileStore, KeyValueStore, ProfileCache
from .profile_api import ProfileApiClient

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "ProfileApiClient",
    "ProfileCache",
]
