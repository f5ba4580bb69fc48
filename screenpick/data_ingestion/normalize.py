from __future__ import annotations

import math
import re
from typing import Any, Mapping

from ..recommendations.models import (
    DEFAULT_OVERVIEW,
    DEFAULT_POSTER,
    DEFAULT_RATING,
    DEFAULT_RUNTIME,
    DEFAULT_YEAR,
    MovieRecord,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _text(value: Any) -> str:
    """Return a stripped string, or "" for None / NaN / non-text cells."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _parse_year(value: Any) -> int:
    match = _LEADING_INT.match(_text(value))
    if not match:
        return DEFAULT_YEAR
    year = int(match.group(1))
    # 0 is treated as missing, same as an unreadable value
    return year or DEFAULT_YEAR


def _parse_rating(value: Any) -> float:
    match = _LEADING_FLOAT.match(_text(value))
    if not match:
        return DEFAULT_RATING
    rating = float(match.group(1))
    if math.isnan(rating) or math.isinf(rating):
        return DEFAULT_RATING
    return rating


def _split_genres(value: Any) -> list[str]:
    return [g.strip() for g in _text(value).split(",") if g.strip()]


def movie_id(index: int) -> str:
    return f"movie-{index}"


def normalize_row(row: Mapping[str, Any], index: int) -> MovieRecord:
    """
    Map one canonical-column row and its position to a MovieRecord.

    Every field is defaulted independently, so a bad cell never takes the
    rest of the row down with it. Callers drop title-less rows beforehand;
    a blank title here still yields "Unknown" rather than an error.
    """
    return MovieRecord(
        id=movie_id(index),
        title=_text(row.get("title")) or "Unknown",
        year=_parse_year(row.get("year")),
        runtime=_text(row.get("runtime")) or DEFAULT_RUNTIME,
        genres=_split_genres(row.get("genres")),
        rating=_parse_rating(row.get("rating")),
        overview=_text(row.get("overview")) or DEFAULT_OVERVIEW,
        poster=_text(row.get("poster")) or DEFAULT_POSTER,
    )
