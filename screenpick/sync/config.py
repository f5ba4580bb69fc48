from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


@dataclass(frozen=True)
class SheetsConfig:
    credentials_file: str = os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE", "")
    spreadsheet_id: str = os.getenv("GOOGLE_SPREADSHEET_ID", "")
    enabled: bool = os.getenv("SCREENPICK_SHEETS_ENABLED", "true").lower() in ("1", "true", "yes")


DEFAULT_SHEETS_CONFIG = SheetsConfig()
