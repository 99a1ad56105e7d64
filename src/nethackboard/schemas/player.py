# src/nethackboard/schemas/player.py

"""Pydantic schemas for players as returned by the leaderboard API."""

from pydantic import BaseModel, ConfigDict


class Player(BaseModel):
    """A GitHub-authenticated player."""

    github_username: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None

    model_config = ConfigDict(extra="ignore")

    @property
    def name(self) -> str:
        """Display name, falling back to the GitHub username."""
        return self.display_name or self.github_username or "Unknown"
