"""
Favorites persistence.

Responsibilities:
- Keep the user's favorite movies in a durable local key/value store.
- Enforce one entry per movie title on insert.
- Mirror new favorites to Google Sheets without letting remote failures
  affect the local result.
"""
