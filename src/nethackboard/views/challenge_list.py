# src/nethackboard/views/challenge_list.py

"""Challenge list: every challenge with its champion, unclaimed ones included."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

from nethackboard.client import ApiClient
from nethackboard.exceptions import ApiRequestError
from nethackboard.processing import ColumnSet, merge_challenges, process
from nethackboard.schemas import ChallengeRow, SortOrder, SubmissionEntry, ViewState

from .base import TableView
from .challenge_detail import SUBMISSION_COLUMNS

logger = logging.getLogger(__name__)

CHALLENGE_COLUMNS = ColumnSet(
    sortable=(
        "name",
        "role",
        "gender",
        "race",
        "alignment",
        "created_at",
        "best_score",
        "champion",
    ),
    text_fields=("name", "role", "race", "alignment", "champion"),
    default_sort="created_at",
    default_direction=SortOrder.DESC,
    numeric_fields=frozenset({"best_score"}),
    date_fields=frozenset({"created_at"}),
)


@dataclass
class ExpandedDetail:
    """Submissions loaded for an expanded challenge row."""

    entries: list[SubmissionEntry] = field(default_factory=list)
    error: str | None = None


class ChallengeListView(TableView):
    """Challenges merged with their best score, with inline drill-down.

    Each expansion is stamped with a generation number. A fetch only writes
    its result if the row is still expanded under the same generation, so a
    late response cannot land in a row that was collapsed or re-expanded in
    the meantime. In-flight fetches are never cancelled.
    """

    name = "challenges"
    path = "/"
    template = "challenge_list.html"
    columns = CHALLENGE_COLUMNS
    empty_message = "No challenges found"

    def __init__(self, client: ApiClient, state: ViewState | None = None) -> None:
        super().__init__(client, state)
        self.details: dict[str, ExpandedDetail] = {}
        self._generation = 0
        self._expansions: dict[str, int] = {}

    async def fetch(self) -> list[ChallengeRow]:
        response = await self.client.get_leaderboard()
        return merge_challenges(response.unclaimed_challenges, response.leaderboard)

    async def load(self) -> None:
        """Load the list, then the submissions of every row already expanded."""
        await super().load()
        if self.records is not None and self.state.expanded:
            await asyncio.gather(
                *(self._start_fetch(cid) for cid in self.state.expanded)
            )

    def is_expanded(self, challenge_id: str) -> bool:
        return challenge_id in self.state.expanded

    def expand_link(self, challenge_id: str) -> str:
        return self.link(self.state.with_expanded(challenge_id))

    def detail_rows(self, challenge_id: str) -> list[SubmissionEntry]:
        """Submissions of an expanded row, best score first."""
        detail = self.details.get(challenge_id)
        if detail is None:
            return []
        return process(
            detail.entries, SUBMISSION_COLUMNS.default_state(), SUBMISSION_COLUMNS
        )

    def toggle_expand(self, challenge_id: str) -> asyncio.Task[bool] | None:
        """Expand or collapse a row.

        Expanding starts a background fetch of the challenge's submissions
        and returns its task; collapsing returns None and leaves any fetch
        still in flight to be discarded when it completes.
        """
        if self.is_expanded(challenge_id):
            self.state = self.state.with_expanded(challenge_id)
            self._expansions.pop(challenge_id, None)
            self.details.pop(challenge_id, None)
            return None

        self.state = self.state.with_expanded(challenge_id)
        return asyncio.create_task(self._start_fetch(challenge_id))

    def _start_fetch(self, challenge_id: str) -> Coroutine[Any, Any, bool]:
        self._generation += 1
        self._expansions[challenge_id] = self._generation
        return self._load_detail(challenge_id, self._generation)

    async def _load_detail(self, challenge_id: str, generation: int) -> bool:
        try:
            response = await self.client.get_challenge_leaderboard(challenge_id)
            detail = ExpandedDetail(entries=response.leaderboard)
        except ApiRequestError as e:
            logger.warning(
                "Failed to load submissions for %s: %s",
                challenge_id,
                e.message,
                extra=e.details,
            )
            detail = ExpandedDetail(error=f"Failed to load: {e.message}")
        return self.apply_detail(challenge_id, generation, detail)

    def apply_detail(
        self, challenge_id: str, generation: int, detail: ExpandedDetail
    ) -> bool:
        """Store a fetched detail if its expansion is still current."""
        if self._expansions.get(challenge_id) != generation:
            logger.debug(
                "Discarding stale submissions for %s",
                challenge_id,
                extra={"challenge_id": challenge_id, "generation": generation},
            )
            return False
        self.details[challenge_id] = detail
        return True
