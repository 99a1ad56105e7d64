# src/nethackboard/processing.py

"""Filter, sort and merge logic shared by every table view.

All functions here are pure: they never mutate their inputs and depend on
nothing but their arguments.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from nethackboard.formatting import epoch_millis
from nethackboard.schemas import (
    Challenge,
    ChallengeRow,
    Player,
    SortOrder,
    SubmissionEntry,
    ViewState,
)

logger = logging.getLogger(__name__)

# Dropdown filter key -> record field it matches against
FILTER_FIELDS = {"class": "role", "race": "race", "gender": "gender"}

# Merit fields sort best-first the first time their header is clicked
DESCENDING_BY_DEFAULT = frozenset({"score", "best_score", "kills"})


@dataclass(frozen=True)
class ColumnSet:
    """Field configuration for one table view.

    Field names may be dotted to reach into embedded records, e.g.
    ``challenge.name`` on a submission entry.

    Attributes:
        sortable: Fields a header may sort by
        text_fields: Fields searched by the free-text filter
        default_sort: Initial sort field
        default_direction: Initial sort direction
        numeric_fields: Fields compared as numbers (None counts as 0)
        date_fields: Fields compared as timestamps (invalid counts as epoch 0)
        player_fields: Fields holding a Player, compared by display name
        filter_prefix: Path prefix for dropdown filters, or None if the view
            has no dropdown filters
    """

    sortable: tuple[str, ...]
    text_fields: tuple[str, ...]
    default_sort: str
    default_direction: SortOrder
    numeric_fields: frozenset[str] = field(default_factory=frozenset)
    date_fields: frozenset[str] = field(default_factory=frozenset)
    player_fields: frozenset[str] = field(default_factory=frozenset)
    filter_prefix: str | None = ""

    def direction_for(self, sort_field: str) -> SortOrder:
        """Direction a newly selected sort field starts in."""
        if sort_field.rsplit(".", 1)[-1] in DESCENDING_BY_DEFAULT:
            return SortOrder.DESC
        return SortOrder.ASC

    def default_state(self) -> ViewState:
        return ViewState(
            sort_field=self.default_sort, sort_direction=self.default_direction
        )


def player_name(player: Any) -> str:
    """Display name of a player record, falling back to the GitHub username."""
    if player is None:
        return ""
    if isinstance(player, Player):
        return player.display_name or player.github_username or ""
    if isinstance(player, Mapping):
        return player.get("display_name") or player.get("github_username") or ""
    return str(player)


def field_value(record: Any, path: str) -> Any:
    """Look up a possibly dotted field on a model or mapping."""
    value = record
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def _text_value(record: Any, path: str, columns: ColumnSet) -> str:
    value = field_value(record, path)
    if path in columns.player_fields or isinstance(value, Player):
        return player_name(value).lower()
    if value is None:
        return ""
    return str(value).lower()


# ===============================================
# == Filtering
# ===============================================


def apply_field_filters(
    records: Iterable[Any], filters: Mapping[str, str], columns: ColumnSet
) -> list[Any]:
    """Keep records whose class/race/gender match exactly (case-insensitive)."""
    rows = list(records)
    if columns.filter_prefix is None:
        return rows

    for key, wanted in filters.items():
        target = FILTER_FIELDS.get(key)
        if target is None or not wanted:
            continue
        path = f"{columns.filter_prefix}{target}"
        wanted = wanted.lower()
        rows = [
            row for row in rows if str(field_value(row, path) or "").lower() == wanted
        ]
    return rows


def apply_text_filter(
    records: Iterable[Any], text: str, columns: ColumnSet
) -> list[Any]:
    """Keep records where any text field contains ``text`` (case-insensitive)."""
    rows = list(records)
    if not text:
        return rows

    needle = text.lower()
    return [
        row
        for row in rows
        if any(needle in _text_value(row, path, columns) for path in columns.text_fields)
    ]


# ===============================================
# == Sorting
# ===============================================


def sort_key(record: Any, sort_field: str, columns: ColumnSet) -> Any:
    """Comparable key for ``sort_field`` according to the field's type."""
    value = field_value(record, sort_field)
    if sort_field in columns.date_fields:
        return epoch_millis(value)
    if sort_field in columns.player_fields:
        return player_name(value).lower()
    if sort_field in columns.numeric_fields:
        return value or 0
    return str(value or "").lower()


def sort_records(
    records: Iterable[Any],
    sort_field: str,
    direction: SortOrder,
    columns: ColumnSet,
) -> list[Any]:
    """Stable sort; records with equal keys keep their input order."""
    return sorted(
        records,
        key=lambda record: sort_key(record, sort_field, columns),
        reverse=direction == SortOrder.DESC,
    )


def process(records: Iterable[Any], state: ViewState, columns: ColumnSet) -> list[Any]:
    """Apply a view's filters and sort order to a record collection."""
    rows = apply_field_filters(records, state.field_filters, columns)
    rows = apply_text_filter(rows, state.text_filter, columns)
    return sort_records(rows, state.sort_field, state.sort_direction, columns)


# ===============================================
# == Challenge list merge
# ===============================================


def merge_challenges(
    unclaimed: Iterable[Challenge], entries: Iterable[SubmissionEntry]
) -> list[ChallengeRow]:
    """Build one row per challenge carrying its best score and champion.

    Unclaimed challenges are seeded first without a score. A scored entry
    replaces the current row for its challenge when there is none yet or
    when it beats the current best (a missing score or best counts as 0).
    """
    rows: dict[str, ChallengeRow] = {}

    for challenge in unclaimed:
        rows[challenge.challenge_id] = ChallengeRow(
            **challenge.model_dump(exclude={"best_score", "champion"}),
            best_score=None,
            champion=None,
        )

    for entry in entries:
        challenge = entry.challenge
        if challenge is None:
            logger.debug("Skipping leaderboard entry without a challenge")
            continue

        score = entry.score or 0
        existing = rows.get(challenge.challenge_id)
        if existing is None or score > (existing.best_score or 0):
            rows[challenge.challenge_id] = ChallengeRow(
                **challenge.model_dump(),
                best_score=score,
                champion=player_name(entry.player) or "Unknown",
            )

    return list(rows.values())
