from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
import logging
import time
from typing import Any, Protocol

from pydantic import BaseModel

from ..analytics.store import record_event

logger = logging.getLogger(__name__)


class RemoteSync(Protocol):
    initialized: bool

    def append(self, sheet_name: str, rows: list[list[Any]]) -> Any: ...


class MirrorStatus(BaseModel):
    available: bool
    submitted: int = 0
    succeeded: int = 0
    failed: int = 0
    pending: int = 0
    last_error: str | None = None
    last_attempt_at: float | None = None


class RemoteMirror:
    """
    Fire-and-forget forwarding of local writes to a RemoteSync.

    ``submit`` returns immediately with the background task. Outcomes are
    counted in ``status()`` and failures are logged, never raised to the
    code that submitted the rows.
    """

    def __init__(self, remote: RemoteSync | None = None) -> None:
        self.remote = remote
        self._tasks: set[asyncio.Task[bool]] = set()
        self._submitted = 0
        self._succeeded = 0
        self._failed = 0
        self._last_error: str | None = None
        self._last_attempt_at: float | None = None
        # One worker: the Sheets client is not safe to call from two threads.
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="remote-mirror"
        )

    @property
    def available(self) -> bool:
        return self.remote is not None and bool(getattr(self.remote, "initialized", False))

    def submit(self, sheet_name: str, rows: list[list[Any]]) -> asyncio.Task[bool] | None:
        """Schedule an append; returns None when the remote is not ready."""
        if not self.available:
            return None
        self._submitted += 1
        task = asyncio.create_task(self._run(sheet_name, rows))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, sheet_name: str, rows: list[list[Any]]) -> bool:
        self._last_attempt_at = time.time()
        try:
            if inspect.iscoroutinefunction(self.remote.append):
                await self.remote.append(sheet_name, rows)
            else:
                loop = asyncio.get_running_loop()
                await loop.run_in_executor(self._executor, self.remote.append, sheet_name, rows)
        except Exception as e:
            self._failed += 1
            self._last_error = f"{type(e).__name__}: {e}"
            logger.warning("Mirroring %d row(s) to %s failed", len(rows), sheet_name, exc_info=True)
            record_event("mirror", {"sheet": sheet_name, "rows": len(rows), "ok": False})
            return False

        self._succeeded += 1
        record_event("mirror", {"sheet": sheet_name, "rows": len(rows), "ok": True})
        return True

    async def wait_idle(self) -> None:
        """Wait for every submitted append to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def status(self) -> MirrorStatus:
        return MirrorStatus(
            available=self.available,
            submitted=self._submitted,
            succeeded=self._succeeded,
            failed=self._failed,
            pending=len(self._tasks),
            last_error=self._last_error,
            last_attempt_at=self._last_attempt_at,
        )
