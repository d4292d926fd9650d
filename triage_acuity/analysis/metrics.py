"""Agreement and accuracy metrics for predicted versus reference levels.

Confusion matrices index rows by the reference level and columns by the
predicted level. Pairs with a level outside 1..5 are skipped. Ratios with an
empty denominator are reported as 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection, List, Sequence

from sklearn.metrics import (
    accuracy_score,
    cohen_kappa_score,
    confusion_matrix,
    f1_score,
    mean_absolute_error,
    precision_score,
    recall_score,
    roc_auc_score,
)

__all__ = [
    "BinaryConfusionMatrix",
    "ConfusionMatrix",
    "LEVEL_LABELS",
    "auc",
    "calibration_error",
    "weighted_kappa",
]

LEVEL_LABELS = [1, 2, 3, 4, 5]


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def _check_pairs(first: Sequence, second: Sequence) -> None:
    if len(first) != len(second):
        raise ValueError(f"Inputs differ in length: {len(first)} vs {len(second)}")


def _valid_level(value: int) -> bool:
    return value in LEVEL_LABELS


def _single_level(first: Sequence[int], second: Sequence[int]) -> bool:
    # Expected agreement is 1 and kappa undefined.
    return len(set(first) | set(second)) == 1


@dataclass
class ConfusionMatrix:
    counts: List[List[int]] = field(default_factory=lambda: [[0] * 5 for _ in range(5)])
    total: int = 0
    predicted: List[int] = field(default_factory=list)
    reference: List[int] = field(default_factory=list)

    @classmethod
    def from_levels(cls, predicted: Sequence[int], reference: Sequence[int]) -> "ConfusionMatrix":
        _check_pairs(predicted, reference)
        pairs = [
            (int(pred), int(ref))
            for pred, ref in zip(predicted, reference)
            if _valid_level(pred) and _valid_level(ref)
        ]
        if not pairs:
            return cls()
        preds = [pred for pred, _ in pairs]
        refs = [ref for _, ref in pairs]
        counts = confusion_matrix(refs, preds, labels=LEVEL_LABELS).tolist()
        return cls(counts=counts, total=len(pairs), predicted=preds, reference=refs)

    def cell(self, reference: int, predicted: int) -> int:
        return self.counts[reference - 1][predicted - 1]

    def tp(self, level: int) -> int:
        if not _valid_level(level):
            return 0
        return self.cell(level, level)

    def fp(self, level: int) -> int:
        if not _valid_level(level):
            return 0
        return sum(self.cell(ref, level) for ref in LEVEL_LABELS if ref != level)

    def fn(self, level: int) -> int:
        if not _valid_level(level):
            return 0
        return sum(self.cell(level, pred) for pred in LEVEL_LABELS if pred != level)

    def tn(self, level: int) -> int:
        if not _valid_level(level):
            return 0
        return self.total - self.tp(level) - self.fp(level) - self.fn(level)

    def _per_level(self, scorer, level: int) -> float:
        if self.total == 0 or not _valid_level(level):
            return 0.0
        values = scorer(
            self.reference, self.predicted, labels=LEVEL_LABELS, average=None, zero_division=0
        )
        return float(values[level - 1])

    def sensitivity(self, level: int) -> float:
        return self._per_level(recall_score, level)

    def specificity(self, level: int) -> float:
        tn = self.tn(level)
        return _ratio(tn, tn + self.fp(level))

    def ppv(self, level: int) -> float:
        return self._per_level(precision_score, level)

    def npv(self, level: int) -> float:
        tn = self.tn(level)
        return _ratio(tn, tn + self.fn(level))

    def f1(self, level: int) -> float:
        return self._per_level(f1_score, level)

    def accuracy(self, level: int) -> float:
        """One-vs-rest accuracy treating *level* as the positive class."""

        return _ratio(self.tp(level) + self.tn(level), self.total)

    def macro_sensitivity(self) -> float:
        if self.total == 0:
            return 0.0
        return float(
            recall_score(
                self.reference, self.predicted, labels=LEVEL_LABELS, average="macro", zero_division=0
            )
        )

    def macro_specificity(self) -> float:
        return sum(self.specificity(level) for level in LEVEL_LABELS) / 5

    def overall_accuracy(self) -> float:
        if self.total == 0:
            return 0.0
        return float(accuracy_score(self.reference, self.predicted))

    def cohen_kappa(self) -> float:
        """Unweighted kappa; 0 when empty or when expected agreement is 1."""

        if self.total == 0 or _single_level(self.reference, self.predicted):
            return 0.0
        return float(cohen_kappa_score(self.reference, self.predicted, labels=LEVEL_LABELS))


@dataclass
class BinaryConfusionMatrix:
    tp: int = 0
    fp: int = 0
    fn: int = 0
    tn: int = 0

    @classmethod
    def from_levels(
        cls,
        predicted: Sequence[int],
        reference: Sequence[int],
        positive: Collection[int] = (1, 2),
    ) -> "BinaryConfusionMatrix":
        """Collapse levels into positive (e.g. high acuity 1-2) versus the rest."""

        _check_pairs(predicted, reference)
        positive = set(positive)
        pairs = [
            (pred in positive, ref in positive)
            for pred, ref in zip(predicted, reference)
            if _valid_level(pred) and _valid_level(ref)
        ]
        if not pairs:
            return cls()
        tn, fp, fn, tp = confusion_matrix(
            [ref for _, ref in pairs], [pred for pred, _ in pairs], labels=[False, True]
        ).ravel()
        return cls(tp=int(tp), fp=int(fp), fn=int(fn), tn=int(tn))

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.fn + self.tn

    def sensitivity(self) -> float:
        return _ratio(self.tp, self.tp + self.fn)

    def specificity(self) -> float:
        return _ratio(self.tn, self.tn + self.fp)

    def ppv(self) -> float:
        return _ratio(self.tp, self.tp + self.fp)

    def npv(self) -> float:
        return _ratio(self.tn, self.tn + self.fn)

    def f1(self) -> float:
        sens, ppv = self.sensitivity(), self.ppv()
        return _ratio(2 * sens * ppv, sens + ppv)

    def accuracy(self) -> float:
        return _ratio(self.tp + self.tn, self.total)


def auc(scores: Sequence[float], outcomes: Sequence[int]) -> float:
    """Area under the ROC curve; an outcome of 1 is positive, anything else negative.

    Tied scores count half. Returns 0.5 when either class is empty.
    """

    _check_pairs(scores, outcomes)
    labels = [1 if outcome == 1 else 0 for outcome in outcomes]
    positives = sum(labels)
    if positives == 0 or positives == len(labels):
        return 0.5
    return float(roc_auc_score(labels, list(scores)))


def calibration_error(scores: Sequence[float], outcomes: Sequence[int]) -> float:
    """Mean absolute difference between clamped scores and binary outcomes."""

    _check_pairs(scores, outcomes)
    if not scores:
        return 0.0
    observed = [1.0 if outcome == 1 else 0.0 for outcome in outcomes]
    clamped = [min(1.0, max(0.0, score)) for score in scores]
    return float(mean_absolute_error(observed, clamped))


def weighted_kappa(predicted: Sequence[int], reference: Sequence[int]) -> float:
    """Linearly weighted kappa, equivalent to agreement weights ``1 - |p - r| / 4``.

    Out-of-range levels are scored as level 3.
    """

    _check_pairs(predicted, reference)
    if not predicted:
        return 0.0
    preds = [p if _valid_level(p) else 3 for p in predicted]
    refs = [r if _valid_level(r) else 3 for r in reference]
    if _single_level(preds, refs):
        return 0.0
    return float(cohen_kappa_score(refs, preds, labels=LEVEL_LABELS, weights="linear"))
