from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Protocol, Sequence

import pandas as pd
from pydantic import ValidationError

from ..data_ingestion.ingest import CANONICAL_COLUMNS, row_to_review
from ..exceptions import StoreUnavailable
from .cache import cache_get, cache_set, clear_cache
from .config import DEFAULT_LISTING_CONFIG, ListingConfig
from .models import Review

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = ("id", "published_at")


class ReviewStore(Protocol):
    def fetch_all(self) -> Sequence[Review]:
        """Return every published review; order is unspecified."""
        ...


class InMemoryReviewStore:
    """Store backed by a fixed collection, used by tests and previews."""

    def __init__(self, reviews: Iterable[Review] = ()) -> None:
        self._reviews = tuple(reviews)

    def fetch_all(self) -> Sequence[Review]:
        return self._reviews


class CsvReviewStore:
    """Store backed by the processed CSV written by the ingestion pipeline."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def fetch_all(self) -> Sequence[Review]:
        try:
            df = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        except FileNotFoundError as exc:
            raise StoreUnavailable(f"Testimonial data not found at {self.path}") from exc
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise StoreUnavailable(f"Could not read testimonial data: {exc}") from exc

        missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise StoreUnavailable(f"Testimonial data is missing columns: {missing}")

        # Optional columns may be absent from older snapshots
        for col in CANONICAL_COLUMNS:
            if col not in df.columns:
                df[col] = ""

        reviews: list[Review] = []
        for row in df.to_dict(orient="records"):
            try:
                reviews.append(row_to_review(row))
            except (ValidationError, ValueError) as exc:
                logger.warning("Skipping malformed testimonial %r: %s", row.get("id"), exc)
        return tuple(reviews)


_store: ReviewStore | None = None


def get_store() -> ReviewStore:
    """Return the active review store, creating the CSV store on first call."""
    global _store
    if _store is None:
        _store = CsvReviewStore(DEFAULT_LISTING_CONFIG.data_path)
    return _store


def set_store(store: ReviewStore | None) -> None:
    """Install *store* as the active store (``None`` restores the default).

    The cached snapshot belongs to the previous store and is dropped.
    """
    global _store
    _store = store
    clear_cache()


def fetch_snapshot(config: ListingConfig = DEFAULT_LISTING_CONFIG) -> tuple[Review, ...]:
    """Fetch the current snapshot once, going through the snapshot cache."""
    if config.cache_ttl > 0:
        cached = cache_get(config.cache_ttl)
        if cached is not None:
            return cached

    try:
        reviews = tuple(get_store().fetch_all())
    except StoreUnavailable:
        logger.error("Review store unavailable", exc_info=True)
        raise

    if config.cache_ttl > 0:
        cache_set(reviews)
    return reviews
