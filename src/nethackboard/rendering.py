# src/nethackboard/rendering.py

"""Jinja2 environment used by every page.

Autoescaping is on for all templates, so any value interpolated into
markup is escaped unless a template explicitly marks it safe.
"""

from functools import lru_cache
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from nethackboard import config, formatting
from nethackboard.schemas import ALIGNMENTS, GENDERS, RACES, ROLES


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("nethackboard", "templates"),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters.update(
        number=formatting.format_number,
        relative_time=formatting.format_relative_time,
        date_utc=formatting.format_date_utc,
        gender=formatting.format_gender,
        alignment=formatting.format_alignment,
        alignment_full=formatting.format_alignment_full,
        capitalize_word=formatting.capitalize,
    )
    env.globals.update(
        site_title=config.SITE_TITLE,
        filter_options={"class": ROLES, "race": RACES, "gender": GENDERS},
        alignments=ALIGNMENTS,
    )
    return env


def render_template(name: str, **context: Any) -> str:
    """Render a template from the package's templates directory."""
    return get_environment().get_template(name).render(**context)
