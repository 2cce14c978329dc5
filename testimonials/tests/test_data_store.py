from __future__ import annotations

from pathlib import Path

import pytest

from testimonials.exceptions import StoreUnavailable
from testimonials.reviews.cache import get_cache_stats
from testimonials.reviews.config import ListingConfig
from testimonials.reviews.data_store import (
    CsvReviewStore,
    InMemoryReviewStore,
    fetch_snapshot,
    set_store,
)
from testimonials.reviews.models import ServiceType

_HEADER = (
    "id,rating,service_type,featured,published_at,body,"
    "author_name,author_position,author_company,placement_role\n"
)


def _write_csv(path: Path, rows: list[str]) -> Path:
    path.write_text(_HEADER + "\n".join(rows) + "\n")
    return path


def test_csv_store_reads_reviews(tmp_path: Path):
    path = _write_csv(tmp_path / "t.csv", [
        '1,5,executive-search,True,2024-05-14 09:30:00,"Great, fast search.",Helen Marsh,CEO,Northgate,CFO',
        "2,,permanent-placement,False,2024-04-02,Fine.,Dan,CTO,Brightwell,",
    ])
    reviews = CsvReviewStore(path).fetch_all()
    assert len(reviews) == 2
    first = next(r for r in reviews if r.id == "1")
    assert first.rating == 5
    assert first.featured is True
    assert first.service_type == ServiceType.executive_search
    assert first.author.company == "Northgate"
    assert first.placement_role == "CFO"
    assert first.body == "Great, fast search."
    second = next(r for r in reviews if r.id == "2")
    assert second.rating is None
    assert second.placement_role is None


def test_csv_store_treats_out_of_range_rating_as_unrated(tmp_path: Path):
    path = _write_csv(tmp_path / "t.csv", [
        "1,7,,False,2024-01-01,Too many stars.,,,,",
        "2,0,,False,2024-01-02,Too few.,,,,",
        "3,4,,False,2024-01-03,Fine.,,,,",
    ])
    ratings = {r.id: r.rating for r in CsvReviewStore(path).fetch_all()}
    assert ratings == {"1": None, "2": None, "3": 4}


def test_csv_store_skips_rows_without_date(tmp_path: Path):
    path = _write_csv(tmp_path / "t.csv", [
        "1,5,,False,,No date.,,,,",
        "2,5,,False,2024-01-01,Dated.,,,,",
    ])
    assert [r.id for r in CsvReviewStore(path).fetch_all()] == ["2"]


def test_csv_store_missing_file_is_unavailable(tmp_path: Path):
    with pytest.raises(StoreUnavailable):
        CsvReviewStore(tmp_path / "missing.csv").fetch_all()


def test_csv_store_missing_columns_is_unavailable(tmp_path: Path):
    path = tmp_path / "bad.csv"
    path.write_text("foo,bar\n1,2\n")
    with pytest.raises(StoreUnavailable):
        CsvReviewStore(path).fetch_all()


def test_csv_store_empty_file_is_unavailable(tmp_path: Path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(StoreUnavailable):
        CsvReviewStore(path).fetch_all()


def test_in_memory_store_returns_snapshot(example_reviews):
    store = InMemoryReviewStore(example_reviews)
    assert list(store.fetch_all()) == example_reviews


def test_fetch_snapshot_uses_cache(example_reviews):
    config = ListingConfig(cache_ttl=60)
    first = fetch_snapshot(config)
    second = fetch_snapshot(config)
    assert second == first
    stats = get_cache_stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["cached_reviews"] == len(example_reviews)


def test_set_store_drops_cached_snapshot():
    config = ListingConfig(cache_ttl=60)
    assert len(fetch_snapshot(config)) == 7
    set_store(InMemoryReviewStore([]))
    assert get_cache_stats()["cached_reviews"] == 0
    assert fetch_snapshot(config) == ()


def test_fetch_snapshot_without_cache_reads_store_each_time():
    config = ListingConfig(cache_ttl=0)
    assert len(fetch_snapshot(config)) == 7
    set_store(InMemoryReviewStore([]))
    assert fetch_snapshot(config) == ()


def test_fetch_snapshot_propagates_store_unavailable(tmp_path: Path):
    set_store(CsvReviewStore(tmp_path / "missing.csv"))
    with pytest.raises(StoreUnavailable):
        fetch_snapshot(ListingConfig(cache_ttl=0))
