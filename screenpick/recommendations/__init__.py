"""
Recommendation engine.

Responsibilities:
- Hold the loaded movie list in a single-load, process-lifetime cache.
- Filter by genre, mood, and decade.
- Shuffle (seeded or ambient), then stable-sort by rating.
- Paginate and return structured responses ready for API serialisation.
"""
