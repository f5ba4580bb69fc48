from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from .config import DEFAULT_SHEETS_CONFIG, SHEETS_SCOPES, SheetsConfig

logger = logging.getLogger(__name__)


class SheetsSync:
    """
    Appends rows to a Google Sheet with a service account.

    ``initialized`` stays False until ``connect()`` has built the Sheets
    service, so callers can cheaply skip mirroring when it is not set up.
    """

    def __init__(self, config: SheetsConfig = DEFAULT_SHEETS_CONFIG) -> None:
        self.config = config
        self._service = None

    @property
    def initialized(self) -> bool:
        return self._service is not None

    def connect(self) -> bool:
        """Authenticate and build the Sheets service. Returns ``initialized``."""
        if self.initialized:
            return True
        if not self.config.enabled:
            return False
        if not self.config.credentials_file or not self.config.spreadsheet_id:
            logger.info("Google Sheets mirroring not configured; favorites stay local")
            return False

        try:
            creds = Credentials.from_service_account_file(
                str(Path(self.config.credentials_file)), scopes=SHEETS_SCOPES
            )
            self._service = build("sheets", "v4", credentials=creds, cache_discovery=False)
        except (OSError, ValueError, GoogleAuthError):
            logger.warning("Could not initialise Google Sheets client", exc_info=True)
            self._service = None
        return self.initialized

    def append(self, sheet_name: str, rows: list[list[Any]]) -> dict[str, Any]:
        """Append ``rows`` below the existing data in ``sheet_name``."""
        if self._service is None:
            raise RuntimeError("Google Sheets client not initialized")
        return (
            self._service.spreadsheets()
            .values()
            .append(
                spreadsheetId=self.config.spreadsheet_id,
                range=f"{sheet_name}!A1",
                valueInputOption="USER_ENTERED",
                insertDataOption="INSERT_ROWS",
                body={"values": rows},
            )
            .execute()
        )
