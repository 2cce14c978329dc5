from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from testimonials.analytics.aggregator import compute_analytics
from testimonials.analytics.store import clear_events, get_events, record_event
from testimonials.app import app
from testimonials.reviews.data_store import CsvReviewStore, set_store

client = TestClient(app)


def _login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


def test_analytics_returns_empty_initially():
    clear_events()
    _login_admin(client)
    resp = client.get("/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_views"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["store_failures"] == 0


def test_analytics_tracks_listing():
    client.get("/testimonials", params={"rating": "5"})
    _login_admin(client)
    body = client.get("/analytics").json()
    assert body["total_views"] == 1
    assert body["rating_filter_usage"] == {"5": 1}
    assert body["filtered_view_rate"] == 100.0


def test_analytics_tracks_multiple_views():
    client.get("/testimonials")
    client.get("/testimonials/page", params={"service": "executive-search"})
    client.get("/testimonials", params={"page": "3"})
    _login_admin(client)
    body = client.get("/analytics").json()
    assert body["total_views"] == 3
    assert body["pagination"]["max_page"] == 3
    assert {"name": "executive-search", "count": 1} in body["service_filter_usage"]


def test_analytics_counts_empty_results():
    client.get("/testimonials", params={"page": "50"})
    _login_admin(client)
    assert client.get("/analytics").json()["empty_result_rate"] == 100.0


def test_analytics_counts_store_failures(tmp_path: Path):
    set_store(CsvReviewStore(tmp_path / "missing.csv"))
    client.get("/testimonials")
    client.get("/testimonials/page")
    _login_admin(client)
    body = client.get("/analytics").json()
    assert body["store_failures"] == 2
    assert body["total_views"] == 0


def test_listing_event_shape():
    client.get("/testimonials", params={"rating": "4", "service": "temporary-staffing"})
    event = get_events()[-1]
    assert event["type"] == "listing"
    assert event["rating_filter"] == "4"
    assert event["service_filter"] == "temporary-staffing"
    assert event["results_returned"] == 1


def test_compute_analytics_ignores_other_events():
    events = [
        {"type": "other", "timestamp": 0.0},
        {"type": "listing", "timestamp": 0.0, "rating_filter": "all", "service_filter": "all",
         "page": 1, "results_returned": 4, "response_time_ms": 2.0},
    ]
    result = compute_analytics(events)
    assert result["total_views"] == 1
    assert result["filtered_view_rate"] == 0.0
    assert result["avg_response_time_ms"] == 2.0


def test_record_event_appends():
    record_event("listing", {"page": 1})
    assert get_events()[-1]["page"] == 1
