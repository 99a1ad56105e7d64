# src/nethackboard/views/__init__.py

"""Table views: leaderboard, challenge list and challenge detail."""

from .base import TableView
from .challenge_detail import SUBMISSION_COLUMNS, ChallengeDetailView
from .challenge_list import CHALLENGE_COLUMNS, ChallengeListView, ExpandedDetail
from .leaderboard import LEADERBOARD_COLUMNS, LeaderboardView

__all__ = [
    "CHALLENGE_COLUMNS",
    "LEADERBOARD_COLUMNS",
    "SUBMISSION_COLUMNS",
    "ChallengeDetailView",
    "ChallengeListView",
    "ExpandedDetail",
    "LeaderboardView",
    "TableView",
]
