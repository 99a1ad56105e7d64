# src/nethackboard/auth.py

"""Login state for the current visitor."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping

from fastapi import Depends, Request

from nethackboard.client import ApiClient, get_api_client
from nethackboard.exceptions import ApiRequestError
from nethackboard.schemas import Player

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class AuthController:
    """Two-state login machine: anonymous or authenticated(user).

    The state is decided by a single status check. The ``login=success``
    query parameter left by the OAuth redirect is only a hint; it never
    authenticates on its own.
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.user: Player | None = None
        self.notice: str | None = None

    @property
    def state(self) -> AuthState:
        return AuthState.AUTHENTICATED if self.user else AuthState.ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    @property
    def login_url(self) -> str:
        return self.client.login_url

    async def initialize(self, query: Mapping[str, str] | None = None) -> AuthState:
        """Run the startup status check, noting any OAuth redirect result."""
        query = query or {}

        if query.get("login") == "success":
            logger.info("OAuth redirect completed, confirming with status check")

        error = query.get("error")
        if error:
            self.notice = f"Login failed: {error}"
            logger.warning("OAuth login failed: %s", error)

        try:
            status = await self.client.check_auth_status()
        except ApiRequestError as e:
            logger.error("Failed to check auth status: %s", e.message, extra=e.details)
            self.user = None
            return self.state

        if status.authenticated and status.user is None:
            logger.warning("Auth status reported authenticated without a user")
        self.user = status.user if status.authenticated else None
        return self.state

    async def logout(self) -> bool:
        """End the session; returns False if the API refused.

        Cached user data is dropped before the state flips to anonymous.
        """
        try:
            await self.client.logout()
        except ApiRequestError as e:
            logger.error("Logout failed: %s", e.message, extra=e.details)
            return False

        self.client.clear_session()
        self.user = None
        return True

    async def generate_token(self) -> str | None:
        """Mint an API token; anonymous visitors get a notice, not a request."""
        if not self.is_authenticated:
            self.notice = "Please log in first"
            return None

        result = await self.client.generate_api_token()
        return result.token


async def get_auth(
    request: Request, client: ApiClient = Depends(get_api_client)
) -> AuthController:
    """FastAPI dependency: the visitor's login state, checked once per page."""
    auth = AuthController(client)
    await auth.initialize(request.query_params)
    return auth
