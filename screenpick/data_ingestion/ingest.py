from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List

import pandas as pd
import requests

from ..recommendations.models import MovieRecord
from .config import DEFAULT_DATASET_CONFIG, DatasetConfig
from .normalize import normalize_row

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "title",
    "year",
    "runtime",
    "genres",
    "rating",
    "overview",
    "poster",
]

# Raw header names seen in the wild, in order of preference.
COLUMN_ALIASES: dict[str, List[str]] = {
    "title": ["Series_Title", "title", "Title", "name"],
    "year": ["Released_Year", "year", "Year", "release_year"],
    "runtime": ["Runtime", "runtime"],
    "genres": ["Genre", "genres", "Genres", "genre"],
    "rating": ["IMDB_Rating", "rating", "Rating", "imdb_rating", "vote_average"],
    "overview": ["Overview", "overview", "description", "plot"],
    "poster": ["Poster_Link", "poster", "Poster", "poster_url"],
}


class LoadError(Exception):
    """The movie table could not be fetched or parsed."""


def fetch_source(config: DatasetConfig = DEFAULT_DATASET_CONFIG) -> str:
    """
    Return the raw CSV text behind ``config.source``.

    Blocking; the data store runs it in a worker thread.
    """
    if config.is_remote:
        try:
            response = requests.get(config.source, timeout=config.fetch_timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise LoadError(f"Could not fetch dataset from {config.source}: {e}") from e
        return response.text

    try:
        return Path(config.source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read dataset at {config.source}: {e}") from e


def parse_dataset(text: str) -> list[MovieRecord]:
    """
    Parse CSV text into MovieRecords.

    Steps:
    - Read every cell as a string so pandas never guesses types.
    - Trim rows with more cells than the header instead of failing.
    - Resolve raw headers into the canonical column names.
    - Drop rows without a title, then normalize the survivors in order.
    """
    trimmed: list[list[str]] = []

    try:
        width = len(pd.read_csv(io.StringIO(text), nrows=0).columns)

        def _trim(line: list[str]) -> list[str]:
            trimmed.append(line)
            return line[:width]

        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            engine="python",
            on_bad_lines=_trim,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise LoadError(f"Could not parse dataset: {e}") from e

    if trimmed:
        logger.warning("Ignored extra cells in %d dataset row(s)", len(trimmed))

    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in df.columns:
                return col
        return None

    resolved = {name: _first_present(aliases) for name, aliases in COLUMN_ALIASES.items()}
    if resolved["title"] is None:
        raise LoadError("Dataset has no title column")

    canonical = pd.DataFrame(index=df.index)
    for name in CANONICAL_COLUMNS:
        col = resolved[name]
        canonical[name] = df[col] if col else ""

    canonical = canonical[canonical["title"].str.strip() != ""]
    dropped = len(df) - len(canonical)
    if dropped:
        logger.debug("Dropped %d dataset rows without a title", dropped)

    return [
        normalize_row(row, index)
        for index, row in enumerate(canonical.to_dict("records"))
    ]
