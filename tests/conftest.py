# tests/conftest.py

"""Pytest configuration and fixtures.

The remote leaderboard API is replaced by ``FakeUpstream``, served to the
client through ``httpx.MockTransport``.
"""

import copy
import json
from typing import Any, AsyncGenerator, Callable

import httpx
import pytest
from fastapi import Request
from httpx import ASGITransport, AsyncClient
from nethackboard.client import ApiClient, get_api_client
from nethackboard.main import app

TEST_API_BASE = "https://api.test"

CHALLENGE_ABC = {
    "challenge_id": "abc",
    "name": "Speedy Wizard",
    "role": "Wizard",
    "race": "elf",
    "gender": "female",
    "alignment": "chaotic",
    "created_at": "2026-10-01T12:00:00Z",
    "seed": "12345",
}
CHALLENGE_XYZ = {
    "challenge_id": "xyz",
    "name": "Valkyrie Classic",
    "role": "Valkyrie",
    "race": "human",
    "gender": "female",
    "alignment": "neutral",
    "created_at": "2026-09-01T12:00:00Z",
}
CHALLENGE_NEW = {
    "challenge_id": "new1",
    "name": "Gnome Mines Dash",
    "role": "Archeologist",
    "race": "gnome",
    "gender": "male",
    "alignment": "neutral",
    "created_at": "2026-10-10T08:00:00Z",
}

WIZ1 = {"github_username": "wiz1", "avatar_url": "https://avatars.test/wiz1.png"}
VALKQ = {"github_username": "valkq", "display_name": "Valk Queen"}

ENTRY_ABC_WIZ1 = {
    "rank": 1,
    "score": 1500,
    "turns": 12000,
    "deepest_level": 12,
    "kills": 140,
    "death_reason": "killed by a soldier ant",
    "submitted_at": "2026-10-18T11:00:00Z",
    "player": WIZ1,
}
ENTRY_XYZ_VALKQ = {
    "rank": 1,
    "score": 800,
    "turns": 9000,
    "deepest_level": 9,
    "kills": 90,
    "death_reason": None,
    "submitted_at": "2026-10-17T09:30:00Z",
    "player": VALKQ,
}
ENTRY_XYZ_WIZ1 = {
    "rank": 2,
    "score": 300,
    "turns": 4000,
    "deepest_level": 5,
    "kills": 30,
    "death_reason": "killed by a jackal",
    "submitted_at": "2026-10-16T20:00:00Z",
    "player": WIZ1,
}

LEADERBOARD = {
    "leaderboard": [
        {**ENTRY_ABC_WIZ1, "challenge": CHALLENGE_ABC},
        {**ENTRY_XYZ_VALKQ, "challenge": CHALLENGE_XYZ},
        {**ENTRY_XYZ_WIZ1, "challenge": CHALLENGE_XYZ},
    ],
    "unclaimed_challenges": [CHALLENGE_NEW],
}


class FakeUpstream:
    """In-memory stand-in for the leaderboard API.

    ``routes`` maps (method, path) to a JSON body, an httpx.Response, or a
    callable taking the request and returning either (sync or async).
    Every request received is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Any] = {
            ("GET", "/leaderboard"): copy.deepcopy(LEADERBOARD),
            ("GET", "/leaderboard/abc"): {
                "challenge": CHALLENGE_ABC,
                "leaderboard": [ENTRY_ABC_WIZ1],
            },
            ("GET", "/leaderboard/xyz"): {
                "challenge": CHALLENGE_XYZ,
                "leaderboard": [ENTRY_XYZ_WIZ1, ENTRY_XYZ_VALKQ],
            },
            ("GET", "/leaderboard/new1"): {
                "challenge": CHALLENGE_NEW,
                "leaderboard": [],
            },
            ("GET", "/challenges"): [CHALLENGE_ABC, CHALLENGE_XYZ, CHALLENGE_NEW],
            ("GET", "/challenges/abc"): CHALLENGE_ABC,
            ("GET", "/auth/status"): {"authenticated": False},
            ("POST", "/auth/token"): {"token": "nhb_tok_123"},
            ("POST", "/auth/logout"): {"success": True},
            ("POST", "/challenges"): self._create_challenge,
        }

    def login_as(self, user: dict) -> None:
        self.routes[("GET", "/auth/status")] = {"authenticated": True, "user": user}

    def fail(self, method: str, path: str, status_code: int = 500, **body: Any) -> None:
        self.routes[(method, path)] = httpx.Response(status_code, json=body)

    def paths(self, method: str | None = None) -> list[str]:
        return [
            r.url.path for r in self.requests if method is None or r.method == method
        ]

    @staticmethod
    def _create_challenge(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(
            201, json={**body, "challenge_id": "created1", "created_at": None}
        )

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "Not found"})
        if isinstance(route, httpx.Response):
            return route
        if callable(route):
            result = route(request)
            if not isinstance(result, httpx.Response):
                result = await result
            return result
        return httpx.Response(200, json=route)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_client(upstream: FakeUpstream) -> Callable[..., ApiClient]:
    """Factory for API clients wired to the fake upstream."""

    def _make(**kwargs: Any) -> ApiClient:
        return ApiClient(
            TEST_API_BASE, transport=httpx.MockTransport(upstream.handle), **kwargs
        )

    return _make


@pytest.fixture
async def api_client(
    make_client: Callable[..., ApiClient],
) -> AsyncGenerator[ApiClient, None]:
    client = make_client()
    yield client
    await client.aclose()


@pytest.fixture
async def async_client(
    make_client: Callable[..., ApiClient],
) -> AsyncGenerator[AsyncClient, None]:
    """Fixture to provide an async test client for the dashboard."""

    # Override the API client dependency to talk to the fake upstream
    async def override_get_api_client(
        request: Request,
    ) -> AsyncGenerator[ApiClient, None]:
        async with make_client(cookies=request.cookies) as client:
            yield client

    app.dependency_overrides[get_api_client] = override_get_api_client

    transport = ASGITransport(app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Clean up the override after the test
    del app.dependency_overrides[get_api_client]
