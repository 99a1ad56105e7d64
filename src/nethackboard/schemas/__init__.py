# src/nethackboard/schemas/__init__.py

"""Pydantic schemas for API payloads and view state."""

from .auth import AuthStatus, TokenResponse
from .challenge import (
    ALIGNMENTS,
    GENDERS,
    RACES,
    ROLES,
    Challenge,
    ChallengeCreate,
    ChallengeRow,
)
from .player import Player
from .submission import (
    ChallengeLeaderboardResponse,
    LeaderboardResponse,
    SubmissionEntry,
)
from .view_state import FILTER_KEYS, SortOrder, ViewState

__all__ = [
    # Auth
    "AuthStatus",
    "TokenResponse",
    # Challenge
    "ALIGNMENTS",
    "GENDERS",
    "RACES",
    "ROLES",
    "Challenge",
    "ChallengeCreate",
    "ChallengeRow",
    # Player
    "Player",
    # Submission
    "ChallengeLeaderboardResponse",
    "LeaderboardResponse",
    "SubmissionEntry",
    # View state
    "FILTER_KEYS",
    "SortOrder",
    "ViewState",
]
