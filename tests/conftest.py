import asyncio
from typing import Any, Dict, List, Optional

import pytest

from talent_profile.schemas.persisted_profile import PersistedProfile, ProfilePayload
from talent_profile.schemas.session import SessionUser
from talent_profile.services.local_cache import InMemoryStore


def profile_json(**overrides: Any) -> Dict[str, Any]:
    data = {
        "id": 7,
        "user_id": 42,
        "name": "Ada Lovelace",
        "geo": "United Kingdom",
        "department": "Engineering",
        "date_of_joining": "2021-03-01T00:00:00Z",
        "end_date": None,
        "notice_date": None,
        "skills": ["Python", "SQL"],
        "years_of_experience": 3,
        "industry": ["Technology|2", "Finance|1"],
        "availability_flag": True,
        "employment_type": "Full-time",
        "experience_level": "Mid-level (2-5 years)",
        "created_at": "2024-01-10T09:00:00Z",
        "updated_at": "2024-06-01T12:30:00Z",
        "user": {
            "id": 42,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "role": "employee",
        },
    }
    data.update(overrides)
    return data


class FakeProfileApi:
    """In-process stand-in for ProfileApiClient. Echoes write payloads back as the saved profile."""

    def __init__(self) -> None:
        self.fetch_result: Optional[PersistedProfile] = None
        self.fetch_error: Optional[Exception] = None
        self.write_error: Optional[Exception] = None
        self.calls: List[tuple] = []
        self.gate: Optional[asyncio.Event] = None

    async def fetch_profile(self, user_id: int) -> PersistedProfile:
        self.calls.append(("fetch", user_id, None))
        if self.gate is not None:
            await self.gate.wait()
        if self.fetch_error is not None:
            raise self.fetch_error
        assert self.fetch_result is not None, "fetch_result not configured"
        return self.fetch_result

    async def create_profile(self, user_id: int, payload: ProfilePayload) -> PersistedProfile:
        return await self._write("create", user_id, payload)

    async def update_profile(self, user_id: int, payload: ProfilePayload) -> PersistedProfile:
        return await self._write("update", user_id, payload)

    async def _write(self, kind: str, user_id: int, payload: ProfilePayload) -> PersistedProfile:
        self.calls.append((kind, user_id, payload))
        if self.gate is not None:
            await self.gate.wait()
        if self.write_error is not None:
            raise self.write_error
        body = payload.model_dump()
        body["id"] = 99
        body["user"] = {"id": user_id, "email": "ada@example.com"}
        return PersistedProfile.model_validate(body)

    def calls_of(self, kind: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def user() -> SessionUser:
    return SessionUser(id=42, email="ada@example.com", name="Ada Lovelace", skills=["Python"])


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def fake_api() -> FakeProfileApi:
    return FakeProfileApi()


@pytest.fixture
def make_profile_json():
    return profile_json
