from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    listings = [e for e in events if e["type"] == "listing"]
    failures = [e for e in events if e["type"] == "store_unavailable"]
    total = len(listings)

    # Average response time
    times = [e["response_time_ms"] for e in listings if "response_time_ms" in e]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Which filter buttons get used
    rating_counter: Counter[str] = Counter(e.get("rating_filter", "all") for e in listings)
    service_counter: Counter[str] = Counter(e.get("service_filter", "all") for e in listings)

    filtered = sum(
        1 for e in listings
        if e.get("rating_filter", "all") != "all" or e.get("service_filter", "all") != "all"
    )

    # How deep visitors page
    pages = [e.get("page", 1) for e in listings]
    avg_page = round(sum(pages) / len(pages), 1) if pages else 0.0
    max_page = max(pages) if pages else 0

    empty = sum(1 for e in listings if e.get("results_returned", 0) == 0)

    return {
        "total_views": total,
        "avg_response_time_ms": avg_time,
        "rating_filter_usage": dict(rating_counter),
        "service_filter_usage": [
            {"name": n, "count": c} for n, c in service_counter.most_common()
        ],
        "filtered_view_rate": round(filtered / total * 100, 1) if total else 0.0,
        "pagination": {"avg_page": avg_page, "max_page": max_page},
        "empty_result_rate": round(empty / total * 100, 1) if total else 0.0,
        "store_failures": len(failures),
    }
