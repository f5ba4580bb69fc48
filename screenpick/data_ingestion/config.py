from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_BUNDLED_CSV = Path(__file__).resolve().parent.parent / "data" / "imdb_top_1000.csv"


@dataclass(frozen=True)
class DatasetConfig:
    """
    Where the movie table comes from and how long a fetch may take.

    ``source`` is either a filesystem path or an http(s) URL.
    """

    source: str = os.getenv("SCREENPICK_DATASET_SOURCE", str(_BUNDLED_CSV))
    fetch_timeout: float = float(os.getenv("SCREENPICK_FETCH_TIMEOUT", "10"))

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))


DEFAULT_DATASET_CONFIG = DatasetConfig()
