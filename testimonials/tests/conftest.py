from __future__ import annotations

from datetime import datetime

import pytest

from testimonials.analytics.store import clear_events
from testimonials.reviews.cache import clear_cache
from testimonials.reviews.data_store import InMemoryReviewStore, set_store
from testimonials.reviews.models import Review, ServiceType


def _review(
    review_id: str,
    rating: int | None,
    published_at: datetime,
    service_type: ServiceType = ServiceType.unspecified,
    featured: bool = False,
) -> Review:
    return Review(
        id=review_id,
        rating=rating,
        service_type=service_type,
        featured=featured,
        published_at=published_at,
        body=f"Testimonial {review_id}",
    )


@pytest.fixture
def make_review():
    return _review


@pytest.fixture
def example_reviews() -> list[Review]:
    """Seven reviews rated [5, 5, 4, None, 3, 5, 4], newest first by id."""
    return [
        _review("r1", 5, datetime(2024, 7, 1), ServiceType.executive_search),
        _review("r2", 5, datetime(2024, 6, 1), ServiceType.permanent_placement, featured=True),
        _review("r3", 4, datetime(2024, 5, 1), ServiceType.temporary_staffing),
        _review("r4", None, datetime(2024, 4, 1), ServiceType.contract_recruitment),
        _review("r5", 3, datetime(2024, 3, 1), ServiceType.permanent_placement),
        _review("r6", 5, datetime(2024, 2, 1), ServiceType.executive_search, featured=True),
        _review("r7", 4, datetime(2024, 1, 1)),
    ]


@pytest.fixture(autouse=True)
def in_memory_store(example_reviews):
    store = InMemoryReviewStore(example_reviews)
    set_store(store)
    clear_cache()
    clear_events()
    yield store
    set_store(None)
    clear_cache()
