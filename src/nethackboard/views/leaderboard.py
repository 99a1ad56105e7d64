# src/nethackboard/views/leaderboard.py

"""Global leaderboard: every ranked submission across all challenges."""

from __future__ import annotations

from nethackboard.processing import ColumnSet
from nethackboard.schemas import SortOrder, SubmissionEntry

from .base import TableView

LEADERBOARD_COLUMNS = ColumnSet(
    sortable=(
        "rank",
        "player",
        "score",
        "challenge.name",
        "challenge.role",
        "turns",
        "deepest_level",
        "kills",
        "submitted_at",
    ),
    text_fields=(
        "challenge.name",
        "challenge.role",
        "challenge.race",
        "challenge.alignment",
        "player",
    ),
    default_sort="score",
    default_direction=SortOrder.DESC,
    numeric_fields=frozenset({"rank", "score", "turns", "deepest_level", "kills"}),
    date_fields=frozenset({"submitted_at"}),
    player_fields=frozenset({"player"}),
    filter_prefix="challenge.",
)


class LeaderboardView(TableView):
    """Ranked submissions, filterable by the challenge's class/race/gender."""

    name = "leaderboard"
    path = "/leaderboard"
    template = "leaderboard.html"
    columns = LEADERBOARD_COLUMNS
    empty_message = "No submissions found"

    async def fetch(self) -> list[SubmissionEntry]:
        # The API narrows by the dropdown filters too; the list processor
        # re-applies them so a later filter change needs no reload.
        response = await self.client.get_leaderboard(self.state.active_filters())
        return response.leaderboard
