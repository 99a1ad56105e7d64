# src/nethackboard/views/challenge_detail.py

"""Per-challenge page: challenge metadata and its submissions."""

from __future__ import annotations

import logging

from nethackboard.client import ApiClient
from nethackboard.exceptions import ChallengeIdMissingError
from nethackboard.processing import ColumnSet
from nethackboard.schemas import Challenge, SortOrder, SubmissionEntry, ViewState

from .base import TableView

logger = logging.getLogger(__name__)

SUBMISSION_COLUMNS = ColumnSet(
    sortable=(
        "rank",
        "player",
        "score",
        "turns",
        "deepest_level",
        "kills",
        "death_reason",
        "submitted_at",
    ),
    text_fields=("player", "death_reason"),
    default_sort="score",
    default_direction=SortOrder.DESC,
    numeric_fields=frozenset({"rank", "score", "turns", "deepest_level", "kills"}),
    date_fields=frozenset({"submitted_at"}),
    player_fields=frozenset({"player"}),
    # every row belongs to the same challenge
    filter_prefix=None,
)


class ChallengeDetailView(TableView):
    """Submissions for one challenge, identified by the ``id`` query parameter."""

    name = "challenge"
    path = "/challenge"
    template = "challenge_detail.html"
    columns = SUBMISSION_COLUMNS
    empty_message = "No submissions yet. Be the first!"

    def __init__(
        self,
        client: ApiClient,
        challenge_id: str | None,
        state: ViewState | None = None,
    ) -> None:
        super().__init__(client, state)
        self.challenge_id = challenge_id or None
        self.challenge: Challenge | None = None
        self.not_found = False

    @property
    def title(self) -> str:
        if self.not_found:
            return "Challenge Not Found"
        if self.error:
            return "Error Loading Challenge"
        if self.challenge:
            return self.challenge.name or ""
        return "Loading..."

    @property
    def download_url(self) -> str:
        return self.client.download_url(self.challenge_id) if self.challenge_id else ""

    def base_params(self) -> list[tuple[str, str]]:
        return [("id", self.challenge_id)] if self.challenge_id else []

    async def fetch(self) -> list[SubmissionEntry]:
        if not self.challenge_id:
            raise ChallengeIdMissingError()
        response = await self.client.get_challenge_leaderboard(self.challenge_id)
        self.challenge = response.challenge
        return response.leaderboard

    async def load(self) -> None:
        try:
            await super().load()
        except ChallengeIdMissingError as e:
            logger.info("Challenge page requested without an ID")
            self.not_found = True
            self.records = None
            self.error = e.message
            self.refresh()
