from __future__ import annotations

import logging
import time

from ..analytics.store import record_event
from ..exceptions import StoreUnavailable
from .aggregation import filter_counts, summarize
from .config import DEFAULT_LISTING_CONFIG, ListingConfig
from .data_store import fetch_snapshot
from .filtering import build_view, select_featured
from .models import FilterRequest, ListingResponse, Page, Review, Summary

logger = logging.getLogger(__name__)


def _record_listing(request: FilterRequest, page: Page, start_time: float, endpoint: str) -> None:
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("listing", {
        "endpoint": endpoint,
        "rating_filter": str(request.rating_filter),
        "service_filter": getattr(request.service_filter, "value", request.service_filter),
        "page": request.page,
        "page_size": request.page_size,
        "total_items": page.total_items,
        "results_returned": len(page.items),
        "response_time_ms": elapsed_ms,
    })


def get_summary(config: ListingConfig = DEFAULT_LISTING_CONFIG) -> Summary:
    return summarize(fetch_snapshot(config))


def get_featured(limit: int | None = None, config: ListingConfig = DEFAULT_LISTING_CONFIG) -> list[Review]:
    if limit is None:
        limit = config.featured_limit
    return select_featured(fetch_snapshot(config), limit)


def get_page(request: FilterRequest, config: ListingConfig = DEFAULT_LISTING_CONFIG) -> Page:
    start_time = time.time()
    try:
        reviews = fetch_snapshot(config)
    except StoreUnavailable:
        record_event("store_unavailable", {"endpoint": "testimonials"})
        raise
    page = build_view(reviews, request)
    _record_listing(request, page, start_time, "testimonials")
    return page


def get_listing(request: FilterRequest, config: ListingConfig = DEFAULT_LISTING_CONFIG) -> ListingResponse:
    """Everything the testimonials page renders, from a single snapshot.

    A store failure yields ``available=False`` with empty sections
    instead of an error, so the page can show a "temporarily
    unavailable" notice.
    """
    start_time = time.time()
    try:
        reviews = fetch_snapshot(config)
    except StoreUnavailable:
        logger.warning("Serving testimonials page without reviews")
        record_event("store_unavailable", {"endpoint": "page"})
        reviews = ()
        available = False
    else:
        available = True

    results = build_view(reviews, request)
    featured = select_featured(reviews, config.featured_limit) if config.featured_first else []

    response = ListingResponse(
        available=available,
        summary=summarize(reviews),
        featured=featured,
        filters=filter_counts(reviews),
        results=results,
    )

    if available:
        _record_listing(request, results, start_time, "page")
    return response
