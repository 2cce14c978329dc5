from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Mapping

import pandas as pd

from ..exceptions import InvalidRatingValue
from ..reviews.models import Author, Review, ServiceType
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)


CANONICAL_COLUMNS: List[str] = [
    "id",
    "rating",
    "service_type",
    "featured",
    "published_at",
    "body",
    "author_name",
    "author_position",
    "author_company",
    "placement_role",
]

_TRUTHY = {"1", "true", "yes", "on"}


def validate_rating(rating: Any) -> int | None:
    """Return the rating as an int in [1, 5], or ``None`` when absent.

    Raises ``InvalidRatingValue`` for anything else, including
    fractional values such as ``4.5``.
    """
    if rating is None:
        return None
    raw = str(rating).strip()
    if not raw or raw.lower() == "nan":
        return None
    # Handle "X/5" format (e.g. "4/5"); any other scale is rejected
    if "/" in raw:
        raw, _, scale = (part.strip() for part in raw.partition("/"))
        if scale != "5":
            raise InvalidRatingValue(rating)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidRatingValue(rating) from None

    if not value.is_integer() or not 1 <= value <= 5:
        raise InvalidRatingValue(rating)
    return int(value)


def _normalize_rating(rating: Any, review_id: str) -> int | None:
    try:
        return validate_rating(rating)
    except InvalidRatingValue as exc:
        logger.warning("Review %s: %s; treating as unrated", review_id, exc)
        return None


def _normalize_service_type(value: Any) -> ServiceType:
    raw = str(value or "").strip().lower().replace("_", "-").replace(" ", "-")
    try:
        return ServiceType(raw)
    except ValueError:
        if raw and raw != "nan":
            logger.warning("Unknown service type %r; using 'unspecified'", value)
        return ServiceType.unspecified


def _normalize_featured(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in _TRUTHY


def _normalize_date(value: Any) -> datetime:
    if isinstance(value, datetime) and not pd.isna(value):
        return value
    parsed = pd.to_datetime(value)
    if pd.isna(parsed):
        raise ValueError(f"Invalid publication date: {value!r}")
    return parsed.to_pydatetime()


def _text(value: Any) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    return "" if text.lower() == "nan" else text


def row_to_review(row: Mapping[str, Any]) -> Review:
    """Build a ``Review`` from a canonical row.

    Out-of-range ratings are logged and the review is kept as unrated.
    """
    review_id = _text(row.get("id"))
    return Review(
        id=review_id,
        rating=_normalize_rating(row.get("rating"), review_id),
        service_type=_normalize_service_type(row.get("service_type")),
        featured=_normalize_featured(row.get("featured")),
        published_at=_normalize_date(row.get("published_at")),
        body=_text(row.get("body")),
        author=Author(
            name=_text(row.get("author_name")),
            position=_text(row.get("author_position")),
            company=_text(row.get("author_company")),
        ),
        placement_role=_text(row.get("placement_role")) or None,
    )


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the testimonial ingestion pipeline.

    Steps:
    - Read the raw WordPress export.
    - Keep published testimonials and map them into the canonical schema.
    - Persist cleaned data as CSV for the review store.
    """

    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    df = pd.read_csv(config.raw_export_path, dtype=str, keep_default_na=False)

    # Export plugins name columns differently; accept the common variants.
    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in df.columns:
                return col
        return None

    col_id = _first_present(["ID", "id", "post_id"])
    col_status = _first_present(["post_status", "Status", "status"])
    col_date = _first_present(["post_date", "Date", "date", "published_at"])
    col_body = _first_present(["post_content", "Content", "content", "body"])
    col_rating = _first_present(["_testimonial_rating", "testimonial_rating", "rating"])
    col_featured = _first_present(["_testimonial_featured", "testimonial_featured", "featured"])
    col_service = _first_present(
        ["_testimonial_service_type", "testimonial_service_type", "service_type"]
    )
    col_name = _first_present(["_testimonial_client_name", "testimonial_client_name", "client_name"])
    col_position = _first_present(
        ["_testimonial_client_position", "testimonial_client_position", "client_position"]
    )
    col_company = _first_present(
        ["_testimonial_client_company", "testimonial_client_company", "client_company"]
    )
    col_role = _first_present(
        ["_testimonial_placement_role", "testimonial_placement_role", "placement_role"]
    )

    if col_status:
        df = df[df[col_status].str.strip().str.lower() == "publish"]

    canonical = pd.DataFrame(index=df.index)
    canonical["id"] = df[col_id] if col_id else df.index.astype(str)

    if col_rating:
        canonical["rating"] = [
            _normalize_rating(value, review_id)
            for value, review_id in zip(df[col_rating], canonical["id"])
        ]
        canonical["rating"] = canonical["rating"].astype("Int64")
    else:
        canonical["rating"] = pd.NA

    canonical["service_type"] = (
        df[col_service].apply(lambda v: _normalize_service_type(v).value)
        if col_service
        else ServiceType.unspecified.value
    )
    canonical["featured"] = df[col_featured].apply(_normalize_featured) if col_featured else False

    if col_date:
        # Rows may differ in format and UTC offset; store everything as UTC
        canonical["published_at"] = pd.to_datetime(
            df[col_date], errors="coerce", format="mixed", utc=True
        )
    else:
        canonical["published_at"] = pd.NaT

    canonical["body"] = df[col_body] if col_body else ""
    canonical["author_name"] = df[col_name] if col_name else ""
    canonical["author_position"] = df[col_position] if col_position else ""
    canonical["author_company"] = df[col_company] if col_company else ""
    canonical["placement_role"] = df[col_role] if col_role else ""

    undated = canonical["published_at"].isna()
    if undated.any():
        logger.warning("Dropping %d testimonials without a valid date", int(undated.sum()))
        canonical = canonical[~undated]

    # Ensure all expected columns exist and order them
    canonical = canonical[CANONICAL_COLUMNS]

    output_path = config.processed_path
    canonical.to_csv(output_path, index=False)
    logger.info("Wrote %d testimonials to %s", len(canonical), output_path)
    return output_path


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    path = run_ingestion()
    print(f"Ingestion complete. Processed data saved to: {path}")
