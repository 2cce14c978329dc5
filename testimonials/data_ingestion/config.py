"""Paths used by the testimonial ingestion pipeline."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the testimonial ingestion pipeline.
    """

    raw_export_path: Path = Path("testimonials/data/raw/testimonials_export.csv")
    processed_data_dir: Path = Path("testimonials/data/processed")
    processed_filename: str = "testimonials.csv"

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
