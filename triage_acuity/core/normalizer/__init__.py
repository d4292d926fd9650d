"""Reference ranges, deviation and label normalisation helpers."""

from .ranges import (
    ReferenceRange,
    ReferenceRanges,
    adult_ranges,
    clamp_to_range,
    deviation,
    in_range,
    normalize_linear,
    pediatric_ranges,
    reference_ranges,
)
from .text import normalize_label

__all__ = [
    "ReferenceRange",
    "ReferenceRanges",
    "adult_ranges",
    "clamp_to_range",
    "deviation",
    "in_range",
    "normalize_label",
    "normalize_linear",
    "pediatric_ranges",
    "reference_ranges",
]
