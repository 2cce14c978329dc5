from __future__ import annotations

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from .models import RATING_FILTERS, FilterCounts, Review, ServiceType, Summary


def _round1(value: float) -> float:
    # Half-up, so 4.25 displays as 4.3 rather than 4.2
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def summarize(reviews: Sequence[Review]) -> Summary:
    """Compute display statistics over the full, unfiltered collection.

    Unrated reviews count towards ``count`` but not towards the average,
    the histogram or the five-star share.
    """
    histogram = {stars: 0 for stars in range(1, 6)}
    total_rating = 0
    featured = 0

    for review in reviews:
        if review.rating is not None:
            histogram[review.rating] += 1
            total_rating += review.rating
        if review.featured:
            featured += 1

    rated = sum(histogram.values())
    five_star = histogram[5]

    return Summary(
        count=len(reviews),
        average_rating=_round1(total_rating / rated) if rated else None,
        five_star_count=five_star,
        featured_count=featured,
        rated_count=rated,
        rating_histogram=histogram,
        five_star_percentage=_round1(five_star / rated * 100) if rated else None,
    )


def filter_counts(reviews: Sequence[Review]) -> FilterCounts:
    """Number of reviews each filter button selects on its own."""
    rating: dict[str, int] = {}
    for option in RATING_FILTERS:
        if option == "all":
            rating["all"] = len(reviews)
        else:
            rating[str(option)] = sum(
                1 for r in reviews if r.rating is not None and r.rating >= option
            )

    service_counter: Counter[ServiceType] = Counter(r.service_type for r in reviews)
    service = {"all": len(reviews)}
    for service_type in ServiceType:
        if service_type is ServiceType.unspecified:
            continue
        service[service_type.value] = service_counter[service_type]

    return FilterCounts(rating=rating, service=service)
