"""
Remote mirroring of local writes.

Responsibilities:
- Manage Google Sheets credentials and the spreadsheet target.
- Append rows to a named sheet through the Sheets v4 API.
- Run mirror requests in the background and expose their outcome.
"""
