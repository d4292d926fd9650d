"""Metrics and statistics computed downstream of the scoring engine."""

from .metrics import BinaryConfusionMatrix, ConfusionMatrix, auc, calibration_error, weighted_kappa
from .stats import LevelStats, ScoreStats, summarize_evaluations

__all__ = [
    "BinaryConfusionMatrix",
    "ConfusionMatrix",
    "LevelStats",
    "ScoreStats",
    "auc",
    "calibration_error",
    "summarize_evaluations",
    "weighted_kappa",
]
