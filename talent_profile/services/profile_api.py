"""Async client for the remote employee profile service."""

import asyncio
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from talent_profile.config import (
    HTTP_MAX_RETRIES,
    HTTP_RETRY_BACKOFF_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    PROFILE_API_BASE_URL,
    PROFILE_API_TOKEN,
)
from talent_profile.errors import (
    NetworkOrUnknownError,
    ProfileConflictError,
    ProfileEngineError,
    ProfileNotFoundError,
    ProfileValidationError,
)
from talent_profile.schemas.persisted_profile import PersistedProfile, ProfilePayload
from talent_profile.utils.logger import get_logger

logger = get_logger(__name__)

PROFILE_PATH = "/api/v1/employee/{user_id}"


def _error_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _field_errors(body: Dict[str, Any]) -> Dict[str, str]:
    """Pull field-level messages from {"errors": {...}} or a single {"error": "..."}."""
    errors = body.get("errors")
    if isinstance(errors, dict):
        return {str(k): str(v) for k, v in errors.items()}
    if body.get("error"):
        return {"__all__": str(body["error"])}
    return {}


def _raise_for_status(response: httpx.Response) -> None:
    """Map service status codes onto the engine's error taxonomy."""
    status = response.status_code
    if status < 400:
        return
    body = _error_body(response)
    message = str(body.get("error") or body.get("message") or response.reason_phrase or "")
    if status == 404:
        raise ProfileNotFoundError(message or "Profile not found", status_code=404)
    if status == 400:
        raise ProfileValidationError(message, field_errors=_field_errors(body))
    if status == 409:
        raise ProfileConflictError(message)
    raise NetworkOrUnknownError(f"Profile service returned {status}: {message}", status_code=status)


def _parse_profile(response: httpx.Response) -> PersistedProfile:
    try:
        body = response.json()
    except ValueError as e:
        raise NetworkOrUnknownError(f"Profile service returned a non-JSON body: {e}") from e
    # Some endpoints wrap the record in {"data": {...}}
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        body = body["data"]
    try:
        return PersistedProfile.model_validate(body)
    except ValidationError as e:
        raise NetworkOrUnknownError(f"Unexpected profile response: {e.error_count()} invalid fields") from e


class ProfileApiClient:
    """
    GET / POST / PATCH against /api/v1/employee/{user_id}.
    Fetches retry transient failures with backoff; writes are single attempt.
    Pass an httpx.AsyncClient to share a connection pool or to plug in a mock transport.
    """

    def __init__(
        self,
        base_url: str = PROFILE_API_BASE_URL,
        token: Optional[str] = PROFILE_API_TOKEN,
        client: Optional[httpx.AsyncClient] = None,
        max_retries: int = HTTP_MAX_RETRIES,
        retry_backoff: float = HTTP_RETRY_BACKOFF_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.max_retries = max(1, max_retries)
        self.retry_backoff = retry_backoff
        self._client = client
        self._owns_client = client is None

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _url(self, user_id: int) -> str:
        return self.base_url + PROFILE_PATH.format(user_id=user_id)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS, follow_redirects=True)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ProfileApiClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def fetch_profile(self, user_id: int) -> PersistedProfile:
        """Fetch the canonical profile. Raises ProfileNotFoundError on 404."""
        url = self._url(user_id)
        last_error: Optional[ProfileEngineError] = None
        attempts = 0
        for attempt in range(self.max_retries):
            attempts = attempt + 1
            try:
                response = await self._get_client().get(url, headers=self._headers())
                _raise_for_status(response)
                profile = _parse_profile(response)
                logger.info("Fetched profile for user %s", user_id)
                return profile
            except (ProfileNotFoundError, ProfileValidationError, ProfileConflictError):
                raise
            except NetworkOrUnknownError as e:
                last_error = e
                if e.status_code is None or e.status_code < 500:
                    break  # Bad body or unexpected 4xx: retrying won't help
                logger.warning("Profile fetch for user %s failed (attempt %s): %s", user_id, attempt + 1, e)
            except httpx.RequestError as e:
                last_error = NetworkOrUnknownError(f"Profile fetch failed: {e}")
                logger.warning("Profile fetch for user %s failed (attempt %s): %s", user_id, attempt + 1, e)
            if attempt + 1 < self.max_retries:
                await asyncio.sleep(self.retry_backoff * (attempt + 1))  # Backoff

        logger.error("Failed to fetch profile for user %s after %s attempts: %s", user_id, attempts, last_error)
        raise last_error or NetworkOrUnknownError("Profile fetch failed")

    async def create_profile(self, user_id: int, payload: ProfilePayload) -> PersistedProfile:
        """POST a new profile. Raises ProfileConflictError if one already exists."""
        return await self._write("POST", user_id, payload)

    async def update_profile(self, user_id: int, payload: ProfilePayload) -> PersistedProfile:
        """PATCH the existing profile."""
        return await self._write("PATCH", user_id, payload)

    async def _write(self, method: str, user_id: int, payload: ProfilePayload) -> PersistedProfile:
        try:
            response = await self._get_client().request(
                method,
                self._url(user_id),
                json=payload.model_dump(mode="json"),
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise NetworkOrUnknownError(f"Profile {method} failed: {e}") from e
        _raise_for_status(response)
        return _parse_profile(response)
