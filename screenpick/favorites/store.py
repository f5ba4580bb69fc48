from __future__ import annotations

import asyncio
import json
import logging
from datetime import date
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from ..analytics.store import record_event
from ..sync.mirror import RemoteMirror
from ..sync.sheets_client import SheetsSync
from .config import DEFAULT_FAVORITES_CONFIG, FavoritesConfig
from .models import FavoriteEntry, FavoriteResult
from .storage import JsonFileStorage, KeyValueStorage

logger = logging.getLogger(__name__)

ADDED_MESSAGE = "Added to favorites!"
SAVE_FAILED_MESSAGE = "Failed to save favorite"
REMOVED_MESSAGE = "Removed from favorites"
REMOVE_FAILED_MESSAGE = "Failed to remove favorite"

_entries_adapter = TypeAdapter(list[FavoriteEntry])


class _Movie(Protocol):
    title: str
    rating: float
    year: int


class FavoritesStore:
    """
    Favorite movies persisted as one JSON list under a fixed storage key.

    Each ``save``/``remove`` is an unguarded read-modify-write, so two
    concurrent writers race and the later write wins. That is fine for a
    single active session.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        mirror: RemoteMirror | None = None,
        config: FavoritesConfig = DEFAULT_FAVORITES_CONFIG,
    ) -> None:
        self.storage = storage
        self.mirror = mirror or RemoteMirror()
        self.config = config

    def _read(self) -> list[FavoriteEntry]:
        """Return the stored list; unreadable or corrupt payloads read as empty."""
        try:
            raw = self.storage.get(self.config.storage_key)
        except (OSError, UnicodeDecodeError):
            logger.warning("Could not read %s; treating as empty", self.config.storage_key, exc_info=True)
            return []
        if not raw:
            return []
        try:
            return _entries_adapter.validate_json(raw)
        except ValidationError:
            logger.warning("Corrupt %s payload; treating as empty", self.config.storage_key)
            return []

    def _write(self, entries: list[FavoriteEntry]) -> None:
        payload = json.dumps([e.model_dump(mode="json") for e in entries])
        self.storage.set(self.config.storage_key, payload)

    async def save(self, movie: _Movie) -> FavoriteResult:
        favorites = await asyncio.to_thread(self._read)
        entry = FavoriteEntry(
            movie_title=movie.title,
            date_added=date.today(),
            rating=movie.rating,
            year=movie.year,
        )

        if any(f.movie_title == entry.movie_title for f in favorites):
            return FavoriteResult(success=True, message=ADDED_MESSAGE)

        favorites.append(entry)
        try:
            await asyncio.to_thread(self._write, favorites)
        except OSError:
            logger.exception("Saving favorite %r failed", entry.movie_title)
            return FavoriteResult(success=False, message=SAVE_FAILED_MESSAGE)

        record_event("favorite_added", {"title": entry.movie_title, "year": entry.year})

        task = self.mirror.submit(
            self.config.sheet_name,
            [[entry.date_added.isoformat(), entry.movie_title, entry.year, entry.rating]],
        )
        return FavoriteResult(success=True, message=ADDED_MESSAGE, mirror_submitted=task is not None)

    async def remove(self, title: str) -> FavoriteResult:
        favorites = await asyncio.to_thread(self._read)
        remaining = [f for f in favorites if f.movie_title != title]
        try:
            await asyncio.to_thread(self._write, remaining)
        except OSError:
            logger.exception("Removing favorite %r failed", title)
            return FavoriteResult(success=False, message=REMOVE_FAILED_MESSAGE)

        if len(remaining) != len(favorites):
            record_event("favorite_removed", {"title": title})
        return FavoriteResult(success=True, message=REMOVED_MESSAGE)

    def is_favorited(self, title: str) -> bool:
        return any(f.movie_title == title for f in self._read())

    def get_favorites(self) -> list[FavoriteEntry]:
        return self._read()


_store: FavoritesStore | None = None


def get_favorites_store() -> FavoritesStore:
    """Return the process-wide store, wiring up Sheets mirroring on first call."""
    global _store
    if _store is None:
        sheets = SheetsSync()
        sheets.connect()
        _store = FavoritesStore(
            JsonFileStorage(DEFAULT_FAVORITES_CONFIG.storage_dir),
            mirror=RemoteMirror(sheets),
        )
    return _store
