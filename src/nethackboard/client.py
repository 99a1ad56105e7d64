# src/nethackboard/client.py

"""Async client for the remote leaderboard API."""

from __future__ import annotations

import logging
from typing import Any, AsyncGenerator, Mapping, TypeVar
from urllib.parse import quote

import httpx
import pydantic
from fastapi import Request

from nethackboard import config
from nethackboard.exceptions import ApiRequestError
from nethackboard.schemas import (
    AuthStatus,
    Challenge,
    ChallengeCreate,
    ChallengeLeaderboardResponse,
    LeaderboardResponse,
    TokenResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

GENERIC_ERROR = "Request failed"

# Dropdown filter key -> query parameter understood by GET /leaderboard
LEADERBOARD_FILTER_PARAMS = {
    "class": "filter_class",
    "race": "filter_race",
    "gender": "filter_gender",
}


def _error_message(response: httpx.Response) -> str:
    """Pull the server's error text out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return GENERIC_ERROR
    if not isinstance(body, dict):
        return GENERIC_ERROR
    return body.get("error") or body.get("message") or GENERIC_ERROR


class ApiClient:
    """Typed wrapper around the leaderboard REST API.

    Every request carries the visitor's session cookies and a JSON content
    type. There is no timeout and no retry: a failed call surfaces once as
    an ApiRequestError and the caller decides how to show it.
    """

    def __init__(
        self,
        base_url: str = config.API_BASE_URL,
        *,
        cookies: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            cookies=dict(cookies or {}),
            headers={"Content-Type": "application/json"},
            timeout=None,
            transport=transport,
        )
        # Set-Cookie headers from the API, relayed to the browser by routes
        # that change the session
        self.set_cookie_headers: list[str] = []

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def clear_session(self) -> None:
        """Forget any session cookies held by this client."""
        self._http.cookies.clear()

    # ===============================================
    # == Transport
    # ===============================================

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error(
                "%s %s failed: %s",
                method,
                path,
                e,
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise ApiRequestError(GENERIC_ERROR, details={"path": path}) from e

        self.set_cookie_headers.extend(response.headers.get_list("set-cookie"))
        logger.debug(
            "%s %s -> %d",
            method,
            path,
            response.status_code,
            extra={"method": method, "path": path, "status_code": response.status_code},
        )

        if not response.is_success:
            message = _error_message(response)
            logger.warning(
                "API error on %s %s: %s",
                method,
                path,
                message,
                extra={"status_code": response.status_code, "path": path},
            )
            raise ApiRequestError(
                message, status_code=response.status_code, details={"path": path}
            )

        try:
            return response.json()
        except ValueError as e:
            raise ApiRequestError(
                GENERIC_ERROR,
                status_code=response.status_code,
                details={"path": path, "reason": "invalid JSON body"},
            ) from e

    async def _get_model(
        self, model: type[ModelT], method: str, path: str, **kwargs: Any
    ) -> ModelT:
        data = await self.request(method, path, **kwargs)
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            logger.error("Unexpected response shape from %s: %s", path, e)
            raise ApiRequestError(
                "Unexpected response from server", details={"path": path}
            ) from e

    # ===============================================
    # == Leaderboard
    # ===============================================

    async def get_leaderboard(
        self, filters: Mapping[str, str] | None = None
    ) -> LeaderboardResponse:
        """Global ranked list plus unclaimed challenges."""
        params = {
            LEADERBOARD_FILTER_PARAMS[key]: value
            for key, value in (filters or {}).items()
            if key in LEADERBOARD_FILTER_PARAMS and value
        }
        return await self._get_model(
            LeaderboardResponse, "GET", "/leaderboard", params=params or None
        )

    async def get_challenge_leaderboard(
        self, challenge_id: str
    ) -> ChallengeLeaderboardResponse:
        """Submissions and metadata for one challenge."""
        return await self._get_model(
            ChallengeLeaderboardResponse,
            "GET",
            f"/leaderboard/{quote(challenge_id, safe='')}",
        )

    # ===============================================
    # == Challenges
    # ===============================================

    async def list_challenges(self) -> list[Challenge]:
        data = await self.request("GET", "/challenges")
        # The list may arrive bare or wrapped in {"challenges": [...]}
        if isinstance(data, dict):
            data = data.get("challenges", [])
        try:
            return [Challenge.model_validate(item) for item in data]
        except (pydantic.ValidationError, TypeError) as e:
            raise ApiRequestError(
                "Unexpected response from server", details={"path": "/challenges"}
            ) from e

    async def get_challenge(self, challenge_id: str) -> Challenge:
        return await self._get_model(
            Challenge, "GET", f"/challenges/{quote(challenge_id, safe='')}"
        )

    async def create_challenge(self, challenge_in: ChallengeCreate) -> Challenge:
        return await self._get_model(
            Challenge, "POST", "/challenges", json=challenge_in.model_dump()
        )

    def download_url(self, challenge_id: str) -> str:
        """Absolute URL of a challenge file; browsers navigate here directly."""
        return f"{self.base_url}/challenges/{quote(challenge_id, safe='')}/download"

    # ===============================================
    # == Auth
    # ===============================================

    async def check_auth_status(self) -> AuthStatus:
        return await self._get_model(AuthStatus, "GET", "/auth/status")

    async def generate_api_token(self) -> TokenResponse:
        """Mint an API token for the game client."""
        return await self._get_model(TokenResponse, "POST", "/auth/token")

    async def logout(self) -> None:
        await self.request("POST", "/auth/logout")

    @property
    def login_url(self) -> str:
        return f"{self.base_url}/auth/github"


async def get_api_client(request: Request) -> AsyncGenerator[ApiClient, None]:
    """FastAPI dependency that provides a client acting for the visitor.

    The visitor's cookies are forwarded so the API sees their session.
    """
    async with ApiClient(cookies=request.cookies) as client:
        yield client
