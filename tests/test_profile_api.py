import asyncio
import json
import logging

import httpx
import pytest

from talent_profile.errors import (
    NetworkOrUnknownError,
    ProfileConflictError,
    ProfileNotFoundError,
    ProfileValidationError,
)
from talent_profile.schemas.profile_draft import ProfileDraft
from talent_profile.services.profile_api import ProfileApiClient
from talent_profile.session.conversion import payload_from_draft

BASE = "https://profiles.test"


def _client(handler, **kwargs) -> ProfileApiClient:
    transport = httpx.MockTransport(handler)
    http = httpx.AsyncClient(transport=transport)
    return ProfileApiClient(base_url=BASE, client=http, retry_backoff=0, **kwargs)


def _payload():
    draft = ProfileDraft(name="Ada", country="United Kingdom", industries=[{"industry": "Finance", "years": 2}])
    return payload_from_draft(draft, 42)


def test_fetch_profile_success(make_profile_json):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=make_profile_json())

    profile = asyncio.run(_client(handler, token="secret").fetch_profile(42))
    assert profile.user_id == 42
    assert seen[0].method == "GET"
    assert str(seen[0].url) == f"{BASE}/api/v1/employee/42"
    assert seen[0].headers["Authorization"] == "Bearer secret"


def test_fetch_unwraps_data_envelope(make_profile_json):
    def handler(request):
        return httpx.Response(200, json={"data": make_profile_json(user_id=9)})

    assert asyncio.run(_client(handler).fetch_profile(9)).user_id == 9


def test_no_auth_header_without_token(make_profile_json):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=make_profile_json())

    asyncio.run(_client(handler, token="").fetch_profile(42))
    assert "Authorization" not in seen[0].headers


def test_fetch_404_raises_not_found_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(404, json={"error": "employee profile not found"})

    with pytest.raises(ProfileNotFoundError):
        asyncio.run(_client(handler, max_retries=3).fetch_profile(42))
    assert len(calls) == 1


def test_fetch_retries_server_errors_then_succeeds(make_profile_json):
    responses = [httpx.Response(503), httpx.Response(502), httpx.Response(200, json=make_profile_json())]

    def handler(request):
        return responses.pop(0)

    profile = asyncio.run(_client(handler, max_retries=3).fetch_profile(42))
    assert profile.user_id == 42
    assert responses == []


def test_fetch_gives_up_after_max_retries():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkOrUnknownError) as exc:
        asyncio.run(_client(handler, max_retries=2).fetch_profile(42))
    assert len(calls) == 2
    assert exc.value.retryable


def test_fetch_invalid_body_is_unknown_error():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"name": "no user id"})

    with pytest.raises(NetworkOrUnknownError):
        asyncio.run(_client(handler, max_retries=3).fetch_profile(42))
    assert len(calls) == 1


def test_create_posts_payload(make_profile_json):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, json=make_profile_json())

    asyncio.run(_client(handler).create_profile(42, _payload()))
    assert seen[0].method == "POST"
    body = json.loads(seen[0].content)
    assert body["user_id"] == 42
    assert body["industry"] == ["Finance|2"]
    assert body["years_of_experience"] == 2


def test_update_uses_patch(make_profile_json):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=make_profile_json())

    asyncio.run(_client(handler).update_profile(42, _payload()))
    assert seen[0].method == "PATCH"


def test_create_conflict():
    def handler(request):
        return httpx.Response(409, json={"error": "profile already exists"})

    with pytest.raises(ProfileConflictError):
        asyncio.run(_client(handler).create_profile(42, _payload()))


def test_validation_error_carries_field_errors():
    def handler(request):
        return httpx.Response(400, json={"errors": {"geo": "required", "skills": "at least one"}})

    with pytest.raises(ProfileValidationError) as exc:
        asyncio.run(_client(handler).update_profile(42, _payload()))
    assert exc.value.field_errors == {"geo": "required", "skills": "at least one"}
    assert not exc.value.retryable


def test_validation_error_single_message():
    def handler(request):
        return httpx.Response(400, json={"error": "Invalid user ID format"})

    with pytest.raises(ProfileValidationError) as exc:
        asyncio.run(_client(handler).update_profile(42, _payload()))
    assert exc.value.field_errors == {"__all__": "Invalid user ID format"}


def test_write_transport_failure_is_single_attempt():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NetworkOrUnknownError):
        asyncio.run(_client(handler, max_retries=3).update_profile(42, _payload()))
    assert len(calls) == 1


def test_write_server_error():
    def handler(request):
        return httpx.Response(500, text="boom")

    with pytest.raises(NetworkOrUnknownError) as exc:
        asyncio.run(_client(handler).create_profile(42, _payload()))
    assert exc.value.status_code == 500


def test_early_stop_logs_actual_attempt_count(caplog):
    def handler(request):
        return httpx.Response(418, json={"error": "teapot"})

    with caplog.at_level(logging.ERROR):
        with pytest.raises(NetworkOrUnknownError):
            asyncio.run(_client(handler, max_retries=3).fetch_profile(42))
    assert "after 1 attempts" in caplog.text
