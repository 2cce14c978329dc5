from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_PROCESSED_CSV = Path(__file__).resolve().parent.parent / "data" / "processed" / "testimonials.csv"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ListingConfig:
    per_page: int = int(os.getenv("TESTIMONIALS_PER_PAGE", "12"))
    max_per_page: int = int(os.getenv("TESTIMONIALS_MAX_PER_PAGE", "50"))
    featured_limit: int = int(os.getenv("TESTIMONIALS_FEATURED_LIMIT", "3"))
    featured_first: bool = _env_bool("TESTIMONIALS_FEATURED_FIRST", True)
    cache_ttl: float = float(os.getenv("TESTIMONIALS_CACHE_TTL", "300"))
    data_path: Path = Path(os.getenv("TESTIMONIALS_DATA_PATH", str(_PROCESSED_CSV)))


DEFAULT_LISTING_CONFIG = ListingConfig()
