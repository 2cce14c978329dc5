from __future__ import annotations

from typing import Any


class TestimonialsError(Exception):
    """Base class for errors raised by the testimonials engine."""


class StoreUnavailable(TestimonialsError):
    """The review collection could not be retrieved from its backing source."""


class InvalidRatingValue(TestimonialsError):
    """A review carries a rating that is not an integer in [1, 5]."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid rating value: {value!r}")
        self.value = value


class InvalidFilterRequest(TestimonialsError):
    """A filter parameter could not be interpreted."""

    def __init__(self, param: str, value: Any) -> None:
        super().__init__(f"Invalid value for {param!r}: {value!r}")
        self.param = param
        self.value = value
