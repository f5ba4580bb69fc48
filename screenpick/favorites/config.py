from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class FavoritesConfig:
    storage_dir: Path = Path(os.getenv("SCREENPICK_STATE_DIR", "screenpick/data/state"))
    storage_key: str = "movieFavorites"
    sheet_name: str = "MovieFavorites"


DEFAULT_FAVORITES_CONFIG = FavoritesConfig()
