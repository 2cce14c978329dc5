from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ServiceType(str, Enum):
    executive_search = "executive-search"
    permanent_placement = "permanent-placement"
    temporary_staffing = "temporary-staffing"
    contract_recruitment = "contract-recruitment"
    unspecified = "unspecified"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()


RatingFilter = Union[Literal["all"], Literal[4], Literal[5]]
ServiceFilter = Union[Literal["all"], ServiceType]

RATING_FILTERS: tuple[RatingFilter, ...] = ("all", 5, 4)


class Author(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    position: str = ""
    company: str = ""


class Review(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    rating: int | None = Field(default=None, ge=1, le=5)
    service_type: ServiceType = ServiceType.unspecified
    featured: bool = False
    published_at: datetime
    body: str = ""
    author: Author = Field(default_factory=Author)
    placement_role: str | None = None

    @computed_field
    @property
    def service_label(self) -> str | None:
        if self.service_type is ServiceType.unspecified:
            return None
        return self.service_type.label

    @computed_field
    @property
    def published_label(self) -> str:
        return self.published_at.strftime("%B %Y")


class FilterRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    rating_filter: RatingFilter = "all"
    service_filter: ServiceFilter = "all"
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, gt=0)


class Summary(BaseModel):
    count: int
    average_rating: float | None
    five_star_count: int
    featured_count: int
    rated_count: int
    rating_histogram: dict[int, int]
    five_star_percentage: float | None


class FilterCounts(BaseModel):
    rating: dict[str, int]
    service: dict[str, int]


class Page(BaseModel):
    items: list[Review]
    total_pages: int
    page: int
    page_size: int
    total_items: int


class ListingResponse(BaseModel):
    available: bool
    summary: Summary
    featured: list[Review]
    filters: FilterCounts
    results: Page
