from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from ..exceptions import InvalidFilterRequest
from .config import DEFAULT_LISTING_CONFIG, ListingConfig
from .models import FilterRequest, Page, RatingFilter, Review, ServiceFilter, ServiceType

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------


def _parse_rating(value: Any) -> RatingFilter:
    if value is None:
        return "all"
    raw = str(value).strip().lower().rstrip("+")
    if raw in ("", "all"):
        return "all"
    if raw == "5":
        return 5
    if raw == "4":
        return 4
    raise InvalidFilterRequest("rating", value)


def _parse_service(value: Any) -> ServiceFilter:
    if value is None:
        return "all"
    raw = str(value).strip().lower()
    if raw in ("", "all"):
        return "all"
    try:
        service = ServiceType(raw)
    except ValueError:
        raise InvalidFilterRequest("service", value) from None
    if service is ServiceType.unspecified:
        raise InvalidFilterRequest("service", value)
    return service


def _parse_positive_int(param: str, value: Any) -> int | None:
    if value is None or str(value).strip() == "":
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidFilterRequest(param, value) from None
    if number <= 0:
        raise InvalidFilterRequest(param, value)
    return number


def parse_filter_request(
    rating: Any = None,
    service: Any = None,
    page: Any = None,
    page_size: Any = None,
    config: ListingConfig = DEFAULT_LISTING_CONFIG,
    strict: bool = False,
) -> FilterRequest:
    """Turn raw query parameters into a ``FilterRequest``.

    Filtering is a display convenience, so by default bad parameters
    degrade instead of failing: an unknown rating or service becomes
    ``"all"``, a bad page becomes 1 and a bad page size becomes the
    configured default. With ``strict=True`` the first bad parameter
    raises ``InvalidFilterRequest``.
    """
    def _degrade(parse, fallback, *args):
        try:
            return parse(*args)
        except InvalidFilterRequest as exc:
            if strict:
                raise
            logger.info("%s; using %r", exc, fallback)
            return fallback

    rating_filter = _degrade(_parse_rating, "all", rating)
    service_filter = _degrade(_parse_service, "all", service)
    page_number = _degrade(_parse_positive_int, 1, "page", page) or 1
    size = _degrade(_parse_positive_int, config.per_page, "page_size", page_size) or config.per_page

    if size > config.max_per_page:
        if strict:
            raise InvalidFilterRequest("page_size", page_size)
        size = config.max_per_page

    return FilterRequest(
        rating_filter=rating_filter,
        service_filter=service_filter,
        page=page_number,
        page_size=size,
    )


# ---------------------------------------------------------------------------
# Predicates and ordering
# ---------------------------------------------------------------------------


def matches(review: Review, request: FilterRequest) -> bool:
    if request.rating_filter != "all":
        if review.rating is None or review.rating < request.rating_filter:
            return False
    if request.service_filter != "all" and review.service_type != request.service_filter:
        return False
    return True


def filter_reviews(reviews: Sequence[Review], request: FilterRequest) -> list[Review]:
    return [r for r in reviews if matches(r, request)]


def _rank_key(review: Review) -> tuple[bool, int, float]:
    # Unrated after rated, then higher rating, then newer first
    return (
        review.rating is None,
        -(review.rating or 0),
        -review.published_at.timestamp(),
    )


def sort_reviews(reviews: Sequence[Review]) -> list[Review]:
    """Order by rating descending (unrated last), newest first within a rating."""
    return sorted(reviews, key=_rank_key)


def select_featured(reviews: Sequence[Review], limit: int) -> list[Review]:
    """Up to *limit* featured reviews, newest first. No padding when short."""
    if limit <= 0:
        return []
    featured = [r for r in reviews if r.featured]
    featured.sort(key=lambda r: r.published_at.timestamp(), reverse=True)
    return featured[:limit]


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


def paginate(filtered: Sequence[Review], page: int, page_size: int) -> Page:
    """Slice one page out of *filtered*.

    An empty result is still page 1 of 1, and a page past the end
    comes back with no items.
    """
    total_pages = max(1, math.ceil(len(filtered) / page_size))
    start = (page - 1) * page_size
    items = list(filtered[start:start + page_size]) if page <= total_pages else []
    return Page(
        items=items,
        total_pages=total_pages,
        page=page,
        page_size=page_size,
        total_items=len(filtered),
    )


def build_view(reviews: Sequence[Review], request: FilterRequest) -> Page:
    """Filter, rank and paginate *reviews* for one listing request."""
    ranked = sort_reviews(filter_reviews(reviews, request))
    return paginate(ranked, request.page, request.page_size)
