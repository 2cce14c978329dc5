from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.config import DEFAULT_AUTH_CONFIG
from .auth.dependencies import require_admin
from .auth.models import LoginRequest
from .auth.users import authenticate
from .exceptions import StoreUnavailable
from .reviews.aggregation import filter_counts
from .reviews.cache import clear_cache, get_cache_stats
from .reviews.config import DEFAULT_LISTING_CONFIG
from .reviews.data_store import fetch_snapshot
from .reviews.filtering import parse_filter_request
from .reviews.models import (
    RATING_FILTERS,
    FilterCounts,
    ListingResponse,
    Page,
    Review,
    ServiceType,
    Summary,
)
from .reviews.retrieval import get_featured, get_listing, get_page, get_summary

app = FastAPI(title="Client Testimonials API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_AUTH_CONFIG.session_secret)

_UNAVAILABLE = "Reviews temporarily unavailable"


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    config = DEFAULT_LISTING_CONFIG
    return {
        "service_types": [
            {"value": s.value, "label": s.label}
            for s in ServiceType
            if s is not ServiceType.unspecified
        ],
        "rating_filters": [str(r) for r in RATING_FILTERS],
        "per_page": config.per_page,
        "max_per_page": config.max_per_page,
        "featured_limit": config.featured_limit,
        "featured_first": config.featured_first,
    }


# ── Testimonials ─────────────────────────────────────────────────────────
# Query parameters arrive as raw strings so that bad values degrade to
# defaults in parse_filter_request instead of failing validation.


@app.get("/testimonials", response_model=Page)
def testimonials(
    rating: str | None = None,
    service: str | None = None,
    page: str | None = None,
    page_size: str | None = None,
) -> Page:
    request = parse_filter_request(rating, service, page, page_size)
    try:
        return get_page(request)
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail=_UNAVAILABLE)


@app.get("/testimonials/summary", response_model=Summary)
def testimonials_summary() -> Summary:
    try:
        return get_summary()
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail=_UNAVAILABLE)


@app.get("/testimonials/featured", response_model=list[Review])
def testimonials_featured(limit: int | None = Query(default=None, ge=0, le=50)) -> list[Review]:
    try:
        return get_featured(limit)
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail=_UNAVAILABLE)


@app.get("/testimonials/filters", response_model=FilterCounts)
def testimonials_filters() -> FilterCounts:
    try:
        return filter_counts(fetch_snapshot())
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail=_UNAVAILABLE)


@app.get("/testimonials/page", response_model=ListingResponse)
def testimonials_page(
    rating: str | None = None,
    service: str | None = None,
    page: str | None = None,
    page_size: str | None = None,
) -> ListingResponse:
    request = parse_filter_request(rating, service, page, page_size)
    return get_listing(request)


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_admin)) -> dict:
    return user


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats(user: dict = Depends(require_admin)) -> dict:
    return get_cache_stats()


@app.post("/cache/clear")
def cache_clear(user: dict = Depends(require_admin)) -> dict:
    clear_cache()
    return {"status": "cleared"}
