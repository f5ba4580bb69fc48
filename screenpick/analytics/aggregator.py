from __future__ import annotations

from collections import Counter
from typing import Any

from ..recommendations.retrieval import decade_bounds


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top requested genres, decades, and moods
    genre_counter: Counter[str] = Counter()
    decade_counter: Counter[str] = Counter()
    mood_counter: Counter[str] = Counter()
    for s in searches:
        if s.get("genre"):
            genre_counter[s["genre"].strip().title()] += 1
        bounds = decade_bounds(s.get("year"))
        if bounds:
            decade_counter[f"{bounds[0]}s"] += 1
        if s.get("mood"):
            mood_counter[s["mood"].strip().lower()] += 1

    # Filter usage rates
    filter_counts = {"genre": 0, "year": 0, "mood": 0, "language": 0}
    for s in searches:
        for name in filter_counts:
            if s.get(name):
                filter_counts[name] += 1

    load_more = sum(1 for s in searches if s.get("offset", 0) > 0)
    empty = sum(1 for s in searches if s.get("total_results", 0) == 0)

    mirror_events = [e for e in events if e["type"] == "mirror"]
    mirror_ok = sum(1 for e in mirror_events if e.get("ok"))

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_genres": [{"name": n, "count": c} for n, c in genre_counter.most_common(10)],
        "top_decades": [{"name": n, "count": c} for n, c in decade_counter.most_common(10)],
        "top_moods": [{"name": n, "count": c} for n, c in mood_counter.most_common(10)],
        "filter_usage": {k: _rate(v, total) for k, v in filter_counts.items()},
        "load_more_rate": _rate(load_more, total),
        "empty_result_rate": _rate(empty, total),
        "trending_views": sum(1 for e in events if e["type"] == "trending"),
        "favorites": {
            "added": sum(1 for e in events if e["type"] == "favorite_added"),
            "removed": sum(1 for e in events if e["type"] == "favorite_removed"),
        },
        "mirror": {
            "succeeded": mirror_ok,
            "failed": len(mirror_events) - mirror_ok,
        },
    }
