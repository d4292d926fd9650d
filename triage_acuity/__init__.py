"""Parametric acuity scoring and five-level triage classification."""

from .core.engine import Evaluation, ScoringEngine
from .core.levels import Level, from_score
from .core.normalizer.ranges import ReferenceRange, ReferenceRanges, deviation, reference_ranges
from .core.params import (
    ParameterSet,
    VitalWeights,
    default_params,
    lenient_params,
    preset,
    research_params,
    strict_params,
)
from .core.scoring import acuity, resource_component, vital_component
from .errors import BatchLengthError, PresetNotFoundError, TriageAcuityError
from .schemas.vitals import VITAL_FIELDS, Vitals

__all__ = [
    "BatchLengthError",
    "Evaluation",
    "Level",
    "ParameterSet",
    "PresetNotFoundError",
    "ReferenceRange",
    "ReferenceRanges",
    "ScoringEngine",
    "TriageAcuityError",
    "VITAL_FIELDS",
    "VitalWeights",
    "Vitals",
    "acuity",
    "default_params",
    "deviation",
    "from_score",
    "lenient_params",
    "preset",
    "reference_ranges",
    "research_params",
    "resource_component",
    "strict_params",
    "vital_component",
]
