from __future__ import annotations

from collections import Counter
from typing import Any


def _avg_time(events: list[dict[str, Any]]) -> float:
    times = [e["response_time_ms"] for e in events if "response_time_ms" in e]
    return round(sum(times) / len(times), 1) if times else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    recommendations = [e for e in events if e["type"] == "recommendation"]
    searches = [e for e in events if e["type"] == "search"]

    # Most requested source books
    source_counter: Counter[str] = Counter()
    for r in recommendations:
        source_counter[r.get("source_id", "unknown")] += 1
    top_sources = [{"book_id": b, "count": c} for b, c in source_counter.most_common(10)]

    # Most frequent search queries
    query_counter: Counter[str] = Counter()
    for s in searches:
        query_counter[str(s.get("query", "")).strip().lower()] += 1
    top_queries = [{"query": q, "count": c} for q, c in query_counter.most_common(10)]

    empty_recommendations = sum(1 for r in recommendations if r.get("results_returned", 0) == 0)
    empty_searches = sum(1 for s in searches if s.get("results_returned", 0) == 0)

    return {
        "total_recommendation_requests": len(recommendations),
        "total_searches": len(searches),
        "avg_recommendation_time_ms": _avg_time(recommendations),
        "avg_search_time_ms": _avg_time(searches),
        "empty_recommendation_rate": (
            round(empty_recommendations / len(recommendations) * 100, 1) if recommendations else 0.0
        ),
        "empty_search_rate": round(empty_searches / len(searches) * 100, 1) if searches else 0.0,
        "top_sources": top_sources,
        "top_queries": top_queries,
    }
