# src/nethackboard/views/base.py

"""Shared behaviour for the sortable, filterable table views."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, ClassVar
from urllib.parse import urlencode

from starlette.datastructures import QueryParams

from nethackboard.client import ApiClient
from nethackboard.exceptions import ApiRequestError, InvalidViewStateError
from nethackboard.processing import ColumnSet, process
from nethackboard.rendering import render_template
from nethackboard.schemas import FILTER_KEYS, SortOrder, ViewState

logger = logging.getLogger(__name__)


class TableView:
    """A table fed by the API, ordered and filtered by a ViewState.

    Subclasses name their columns, template and URL path and implement
    ``fetch``. Every state change re-runs the list processor, so ``rows``
    always reflects the current data snapshot and state.
    """

    name: ClassVar[str]
    path: ClassVar[str]
    template: ClassVar[str]
    columns: ClassVar[ColumnSet]
    empty_message: ClassVar[str] = "No results"

    def __init__(self, client: ApiClient, state: ViewState | None = None) -> None:
        self.client = client
        self.state = state or self.columns.default_state()
        self.records: list[Any] | None = None
        self.error: str | None = None
        self.rows: list[Any] = []
        self.loaded_at: datetime | None = None

    # ===============================================
    # == Query string <-> state
    # ===============================================

    @classmethod
    def parse_sort(cls, query: QueryParams) -> tuple[str, SortOrder]:
        """Read the sort field and direction, validated against the columns."""
        default = cls.columns.default_state()
        sort_field = query.get("sort") or default.sort_field
        if sort_field not in cls.columns.sortable:
            raise InvalidViewStateError(cls.name, f"unknown sort field {sort_field!r}")

        raw_direction = query.get("dir")
        if not raw_direction:
            if sort_field == default.sort_field:
                return sort_field, default.sort_direction
            return sort_field, cls.columns.direction_for(sort_field)
        try:
            return sort_field, SortOrder(raw_direction)
        except ValueError:
            raise InvalidViewStateError(
                cls.name, f"unknown sort direction {raw_direction!r}"
            )

    @classmethod
    def state_from_query(cls, query: QueryParams) -> ViewState:
        """Rebuild a view's state from its query string.

        An invalid sort falls back to the view's default order; filters
        are kept either way.
        """
        try:
            sort_field, direction = cls.parse_sort(query)
        except InvalidViewStateError as e:
            logger.warning("Ignoring sort settings: %s", e.message, extra=e.details)
            default = cls.columns.default_state()
            sort_field, direction = default.sort_field, default.sort_direction

        expanded: list[str] = []
        for challenge_id in query.getlist("expand"):
            if challenge_id and challenge_id not in expanded:
                expanded.append(challenge_id)

        return ViewState(
            sort_field=sort_field,
            sort_direction=direction,
            text_filter=query.get("q", ""),
            field_filters={key: query[key] for key in FILTER_KEYS if query.get(key)},
            expanded=expanded,
        )

    def base_params(self) -> list[tuple[str, str]]:
        """Query parameters identifying the page itself (not its state)."""
        return []

    def link(self, state: ViewState) -> str:
        """URL of this page showing ``state``."""
        query = state.to_query()
        base = urlencode(self.base_params())
        if base:
            query = f"{base}&{query}"
        return f"{self.path}?{query}"

    # ===============================================
    # == User interaction
    # ===============================================

    def on_sort_click(self, field: str) -> None:
        """Sort by ``field``; clicking the current field flips the direction."""
        if field not in self.columns.sortable:
            raise InvalidViewStateError(self.name, f"unknown sort field {field!r}")
        self.state = self.state.toggled(field, self.columns.direction_for(field))
        self.refresh()

    def on_filter_change(self, filters: dict[str, str]) -> None:
        """Replace the dropdown filters."""
        self.state = self.state.model_copy(
            update={
                "field_filters": {
                    key: value for key, value in filters.items() if key in FILTER_KEYS
                }
            }
        )
        self.refresh()

    def on_text_filter_change(self, text: str) -> None:
        """Replace the free-text filter."""
        self.state = self.state.model_copy(update={"text_filter": text})
        self.refresh()

    def sort_link(self, field: str) -> str:
        return self.link(self.state.toggled(field, self.columns.direction_for(field)))

    def sort_class(self, field: str) -> str:
        """Indicator class for a sortable header."""
        if field != self.state.sort_field:
            return ""
        return f"sort-{self.state.sort_direction.value}"

    # ===============================================
    # == Data
    # ===============================================

    async def fetch(self) -> list[Any]:
        raise NotImplementedError

    async def load(self) -> None:
        """Fetch the view's records; a failure becomes the inline message."""
        self.loaded_at = datetime.now(timezone.utc)
        try:
            self.records = await self.fetch()
            self.error = None
        except ApiRequestError as e:
            logger.error(
                "Failed to load %s: %s", self.name, e.message, extra=e.details
            )
            self.records = None
            self.error = f"Failed to load: {e.message}"
        self.refresh()

    def refresh(self) -> None:
        """Re-run filtering and sorting over the current records."""
        if self.records is None:
            self.rows = []
        else:
            self.rows = process(self.records, self.state, self.columns)

    def render(self, now: datetime | None = None, **context: Any) -> str:
        """HTML for the page.

        Relative times are measured from ``now``, defaulting to when the data
        was loaded, so unchanged data and state render identically.
        """
        return render_template(
            self.template,
            view=self,
            state=self.state,
            rows=self.rows,
            now=now or self.loaded_at,
            **context,
        )
