# src/nethackboard/schemas/auth.py

"""Schemas for the authentication endpoints."""

from pydantic import BaseModel, ConfigDict

from .player import Player


class AuthStatus(BaseModel):
    """Body of GET /auth/status."""

    authenticated: bool = False
    user: Player | None = None

    model_config = ConfigDict(extra="ignore")


class TokenResponse(BaseModel):
    """Body of POST /auth/token."""

    token: str

    model_config = ConfigDict(extra="ignore")
