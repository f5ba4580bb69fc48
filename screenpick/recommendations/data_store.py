from __future__ import annotations

import asyncio
import logging
from typing import Callable

from ..data_ingestion.config import DEFAULT_DATASET_CONFIG, DatasetConfig
from ..data_ingestion.ingest import LoadError, fetch_source, parse_dataset
from .models import MovieRecord

logger = logging.getLogger(__name__)


class DatasetCache:
    """
    Process-lifetime cache of the movie table.

    The first ``load()`` starts a single fetch/parse task; every caller that
    arrives while it is running awaits that same task. Once loaded the list
    is never mutated or evicted. A failed load leaves the cache empty so the
    next call retries.
    """

    def __init__(
        self,
        config: DatasetConfig = DEFAULT_DATASET_CONFIG,
        fetch: Callable[[DatasetConfig], str] = fetch_source,
    ) -> None:
        self.config = config
        self._fetch = fetch
        self._records: list[MovieRecord] | None = None
        self._pending: asyncio.Task[list[MovieRecord]] | None = None

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    @property
    def records(self) -> list[MovieRecord]:
        """Return the cached list; raise LoadError if nothing is loaded yet."""
        if self._records is None:
            raise LoadError("Dataset has not been loaded")
        return self._records

    async def load(self) -> list[MovieRecord]:
        if self._records is not None:
            return self._records
        if self._pending is None:
            self._pending = asyncio.create_task(self._load())
        # Shielded so a cancelled waiter does not cancel the shared load.
        return await asyncio.shield(self._pending)

    async def _load(self) -> list[MovieRecord]:
        try:
            text = await asyncio.to_thread(self._fetch, self.config)
            records = await asyncio.to_thread(parse_dataset, text)
            self._records = records
        except LoadError:
            logger.error("Loading dataset from %s failed", self.config.source, exc_info=True)
            raise
        except Exception as e:
            logger.error("Loading dataset from %s failed", self.config.source, exc_info=True)
            raise LoadError(str(e)) from e
        finally:
            self._pending = None

        logger.info("Loaded %d movies from %s", len(records), self.config.source)
        return records

    def reset(self) -> None:
        """Forget the cached list so the next ``load()`` fetches again."""
        self._records = None
        self._pending = None


_cache = DatasetCache()


def get_dataset_cache() -> DatasetCache:
    """Return the process-wide dataset cache."""
    return _cache


async def load_dataset() -> list[MovieRecord]:
    """Return the in-memory movie list, loading it on first call."""
    return await _cache.load()
