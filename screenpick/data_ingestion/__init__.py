"""
Data ingestion package.

Responsibilities:
- Fetch the raw movie table from a local file or URL.
- Map raw columns into the canonical MovieRecord schema.
- Default or repair malformed fields so downstream code never sees them.
"""
