import asyncio
import threading
import time
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from screenpick.analytics.store import get_events
from screenpick.sync.config import SheetsConfig
from screenpick.sync.mirror import RemoteMirror
from screenpick.sync.sheets_client import SheetsSync

CONFIGURED = SheetsConfig(credentials_file="creds.json", spreadsheet_id="sheet-123", enabled=True)


def test_connect_without_configuration_stays_uninitialized():
    client = SheetsSync(SheetsConfig(credentials_file="", spreadsheet_id="", enabled=True))
    assert client.connect() is False
    assert client.initialized is False


def test_connect_disabled():
    client = SheetsSync(SheetsConfig(credentials_file="c.json", spreadsheet_id="s", enabled=False))
    assert client.connect() is False


@patch("screenpick.sync.sheets_client.build")
@patch("screenpick.sync.sheets_client.Credentials")
def test_connect_builds_sheets_service(mock_creds, mock_build):
    client = SheetsSync(CONFIGURED)

    assert client.connect() is True
    assert client.initialized is True
    mock_creds.from_service_account_file.assert_called_once()
    assert mock_build.call_args.args[:2] == ("sheets", "v4")


@patch("screenpick.sync.sheets_client.Credentials")
def test_connect_with_missing_credentials_file(mock_creds):
    mock_creds.from_service_account_file.side_effect = FileNotFoundError("creds.json")
    client = SheetsSync(CONFIGURED)

    assert client.connect() is False
    assert client.initialized is False


@patch("screenpick.sync.sheets_client.build")
@patch("screenpick.sync.sheets_client.Credentials")
def test_append_calls_values_append(mock_creds, mock_build):
    service = MagicMock()
    mock_build.return_value = service
    client = SheetsSync(CONFIGURED)
    client.connect()

    client.append("MovieFavorites", [["2024-05-01", "Heat", 1995, 8.3]])

    append = service.spreadsheets.return_value.values.return_value.append
    kwargs = append.call_args.kwargs
    assert kwargs["spreadsheetId"] == "sheet-123"
    assert kwargs["range"] == "MovieFavorites!A1"
    assert kwargs["body"] == {"values": [["2024-05-01", "Heat", 1995, 8.3]]}
    append.return_value.execute.assert_called_once()


def test_append_before_connect_raises():
    with pytest.raises(RuntimeError):
        SheetsSync(CONFIGURED).append("MovieFavorites", [])


def test_mirror_without_remote_is_unavailable():
    mirror = RemoteMirror()

    async def _run():
        return mirror.submit("MovieFavorites", [["x"]])

    assert asyncio.run(_run()) is None
    assert mirror.status().available is False
    assert mirror.status().submitted == 0


def test_mirror_supports_async_remote():
    remote = MagicMock()
    remote.initialized = True
    remote.append = AsyncMock(return_value=None)
    mirror = RemoteMirror(remote)

    async def _run():
        mirror.submit("MovieFavorites", [["a"]])
        await mirror.wait_idle()

    asyncio.run(_run())

    remote.append.assert_awaited_once_with("MovieFavorites", [["a"]])
    status = mirror.status()
    assert status.succeeded == 1
    assert status.pending == 0


def test_mirror_failure_is_counted_and_recorded():
    remote = MagicMock()
    remote.initialized = True
    remote.append.side_effect = ConnectionError("offline")
    mirror = RemoteMirror(remote)

    async def _run():
        task = mirror.submit("MovieFavorites", [["a"], ["b"]])
        return await task

    assert asyncio.run(_run()) is False

    status = mirror.status()
    assert status.submitted == 1
    assert status.failed == 1
    assert status.last_error == "ConnectionError: offline"
    assert get_events("mirror")[0]["ok"] is False


class CountingRemote:
    """Blocking remote that records how many appends overlap."""

    def __init__(self) -> None:
        self.initialized = True
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def append(self, sheet_name, rows):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(0.05)
        with self._lock:
            self.active -= 1


def test_mirror_runs_blocking_appends_one_at_a_time():
    remote = CountingRemote()
    mirror = RemoteMirror(remote)

    async def _run():
        mirror.submit("MovieFavorites", [["a"]])
        mirror.submit("MovieFavorites", [["b"]])
        mirror.submit("MovieFavorites", [["c"]])
        await mirror.wait_idle()

    asyncio.run(_run())

    assert remote.max_active == 1
    assert mirror.status().succeeded == 3
