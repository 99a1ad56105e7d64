# src/nethackboard/schemas/view_state.py

"""Per-view sort/filter state and its query-string form."""

from enum import Enum
from urllib.parse import urlencode

from pydantic import BaseModel, Field

# Dropdown filters a view may carry, in query-string order
FILTER_KEYS = ("class", "race", "gender")


class SortOrder(str, Enum):
    """Sort order for table views."""

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortOrder":
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


class ViewState(BaseModel):
    """Sort, filter and expansion settings for one table view.

    Attributes:
        sort_field: Field the table is ordered by
        sort_direction: asc or desc
        text_filter: Free-text search, matched case-insensitively
        field_filters: Dropdown filters keyed by class/race/gender
        expanded: Challenge IDs whose rows are drilled into, in expand order
    """

    sort_field: str
    sort_direction: SortOrder
    text_filter: str = ""
    field_filters: dict[str, str] = Field(default_factory=dict)
    expanded: list[str] = Field(default_factory=list)

    def toggled(self, field: str, default_direction: SortOrder) -> "ViewState":
        """State after the header for ``field`` is clicked."""
        if field == self.sort_field:
            direction = self.sort_direction.flipped()
        else:
            direction = default_direction
        return self.model_copy(
            update={"sort_field": field, "sort_direction": direction}
        )

    def with_expanded(self, challenge_id: str) -> "ViewState":
        """State with ``challenge_id`` added to or removed from the expanded set."""
        if challenge_id in self.expanded:
            expanded = [cid for cid in self.expanded if cid != challenge_id]
        else:
            expanded = [*self.expanded, challenge_id]
        return self.model_copy(update={"expanded": expanded})

    def active_filters(self) -> dict[str, str]:
        """Non-empty dropdown filters only."""
        return {
            key: value
            for key, value in self.field_filters.items()
            if key in FILTER_KEYS and value
        }

    def to_query(self) -> str:
        """Encode the state as a URL query string (without the leading '?')."""
        params: list[tuple[str, str]] = [
            ("sort", self.sort_field),
            ("dir", self.sort_direction.value),
        ]
        if self.text_filter:
            params.append(("q", self.text_filter))
        for key in FILTER_KEYS:
            value = self.field_filters.get(key)
            if value:
                params.append((key, value))
        params.extend(("expand", cid) for cid in self.expanded)
        return urlencode(params)
