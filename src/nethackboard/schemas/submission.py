# src/nethackboard/schemas/submission.py

"""Leaderboard schemas: submissions and the responses that carry them."""

from pydantic import BaseModel, ConfigDict, Field

from .challenge import Challenge
from .player import Player


class SubmissionEntry(BaseModel):
    """One player's completed attempt at a challenge.

    Attributes:
        rank: Position within the challenge (1-indexed, assigned by the server)
        score: Final game score
        turns: Game turns taken
        deepest_level: Deepest dungeon level reached
        kills: Monsters killed
        death_reason: How the run ended, if it ended in death
        submitted_at: ISO timestamp of the submission
        player: The submitting player
        challenge: The challenge played (absent on per-challenge listings)
    """

    rank: int | None = None
    score: int | None = None
    turns: int | None = None
    deepest_level: int | None = None
    kills: int | None = None
    death_reason: str | None = None
    submitted_at: str | None = None
    player: Player | None = None
    challenge: Challenge | None = None

    model_config = ConfigDict(extra="ignore")

    @property
    def rank_class(self) -> str:
        """Badge class for the top three ranks."""
        if self.rank is None or not 1 <= self.rank <= 3:
            return ""
        return f"rank-{self.rank}"


class LeaderboardResponse(BaseModel):
    """Body of GET /leaderboard."""

    leaderboard: list[SubmissionEntry] = Field(default_factory=list)
    unclaimed_challenges: list[Challenge] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class ChallengeLeaderboardResponse(BaseModel):
    """Body of GET /leaderboard/{challenge_id}."""

    challenge: Challenge
    leaderboard: list[SubmissionEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")
