# src/nethackboard/formatting.py

"""Display formatting for leaderboard values.

Every function here is total: missing or malformed input degrades to a
placeholder string instead of raising, so a single bad record from the API
never breaks a page.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from markupsafe import escape


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive timestamps are taken to be UTC. Returns None for anything that
    does not parse.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def epoch_millis(value: Any) -> int:
    """Milliseconds since the epoch, or 0 when the value is not a date."""
    dt = parse_timestamp(value)
    if dt is None:
        return 0
    return int(dt.timestamp() * 1000)


def format_number(num: Any) -> str:
    """Format a number with thousands separators; None becomes "0"."""
    if num is None:
        return "0"
    try:
        return f"{num:,}"
    except (TypeError, ValueError):
        return str(num)


def format_date_utc(value: Any) -> str:
    """Format a timestamp as 'YYYY-MM-DD HH:MM:SS UTC' for tooltips."""
    dt = parse_timestamp(value)
    if dt is None:
        return ""
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


def format_relative_time(value: Any, now: datetime | None = None) -> str:
    """Describe how long ago a timestamp was, e.g. '5m ago'.

    Each bucket floors its unit: seconds under a minute, then minutes,
    hours, days, weeks (under 5), months of 30 days (under 12) and years
    of 365 days.
    """
    dt = parse_timestamp(value)
    if dt is None:
        return ""
    now = parse_timestamp(now) or datetime.now(timezone.utc)

    seconds = math.floor((now - dt).total_seconds())
    if seconds < 60:
        return "just now" if seconds <= 1 else f"{seconds}s ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    weeks = days // 7
    if weeks < 5:
        return f"{weeks}w ago"
    months = days // 30
    if months < 12:
        return f"{months}mo ago"
    return f"{days // 365}y ago"


def capitalize(text: Any) -> str:
    """Upper-case the first letter and lower-case the rest."""
    if not text:
        return ""
    text = str(text)
    return text[:1].upper() + text[1:].lower()


def format_gender(gender: Any) -> str:
    """Shorten a gender to M/F, '?' when unknown."""
    if not gender:
        return "?"
    g = str(gender).lower()
    if g in ("male", "m"):
        return "M"
    if g in ("female", "f"):
        return "F"
    return "?"


_ALIGNMENTS = {
    "lawful": "Lawful",
    "law": "Lawful",
    "neutral": "Neutral",
    "neu": "Neutral",
    "chaotic": "Chaotic",
    "cha": "Chaotic",
}


def format_alignment(alignment: Any) -> str:
    """Three-letter alignment code (Law/Neu/Cha)."""
    if not alignment:
        return "?"
    full = _ALIGNMENTS.get(str(alignment).lower())
    if full:
        return full[:3]
    return capitalize(str(alignment)[:3])


def format_alignment_full(alignment: Any) -> str:
    """Full alignment name (Lawful/Neutral/Chaotic)."""
    if not alignment:
        return "?"
    return _ALIGNMENTS.get(str(alignment).lower()) or capitalize(alignment)


def escape_html(text: Any) -> str:
    """Escape text for safe interpolation into HTML."""
    if text is None:
        return ""
    return str(escape(text))
