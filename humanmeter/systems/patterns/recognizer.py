"""
HumanMeter — Pattern Recognizer

Scans the whole session history for failure signatures that no single
analysis can reveal. Three detectors run independently on every call:

  RECURRING_VIOLATION   — the same axiom broken again and again
  CLASSIFICATION_DRIFT  — no two analyses agree on what kind of statement it is
  PROGRESSIVE_DECAY     — integrity falling on every single analysis

Nothing is accumulated between calls; the history is never mutated.
"""

from __future__ import annotations

import enum
from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING

from humanmeter.primitives.common import FrozenModel, Severity

if TYPE_CHECKING:
    from humanmeter.engine.types import AnalysisRecord

DEFAULT_MIN_HISTORY = 3
DEFAULT_RECURRING_THRESHOLD = 3
DEFAULT_DRIFT_MIN_HISTORY = 5


class PatternKind(str, enum.Enum):
    RECURRING_VIOLATION = "RECURRING_VIOLATION"
    CLASSIFICATION_DRIFT = "CLASSIFICATION_DRIFT"
    PROGRESSIVE_DECAY = "PROGRESSIVE_DECAY"


class Pattern(FrozenModel):
    pattern_kind: PatternKind
    detail: str
    severity: Severity
    frequency: int | None = None


class PatternRecognizer:
    def __init__(
        self,
        min_history: int = DEFAULT_MIN_HISTORY,
        recurring_threshold: int = DEFAULT_RECURRING_THRESHOLD,
        drift_min_history: int = DEFAULT_DRIFT_MIN_HISTORY,
    ) -> None:
        self.min_history = min_history
        self.recurring_threshold = recurring_threshold
        self.drift_min_history = drift_min_history

    def recognize(self, history: Sequence[AnalysisRecord]) -> list[Pattern]:
        if len(history) < self.min_history:
            return []

        patterns = self._recurring_violations(history)

        categories = [r.classification.category for r in history]
        if len(categories) >= self.drift_min_history and len(set(categories)) == len(categories):
            patterns.append(Pattern(
                pattern_kind=PatternKind.CLASSIFICATION_DRIFT,
                detail="No consensus across analyses",
                severity=Severity.MODERATE,
            ))

        integrities = [r.integrity for r in history]
        if all(later < earlier for earlier, later in zip(integrities, integrities[1:])):
            patterns.append(Pattern(
                pattern_kind=PatternKind.PROGRESSIVE_DECAY,
                detail="Consistent integrity decline",
                severity=Severity.CRITICAL,
            ))

        return patterns

    def _recurring_violations(self, history: Sequence[AnalysisRecord]) -> list[Pattern]:
        # Counter keeps first-seen order, so patterns come out in that order too.
        tally: Counter[str] = Counter(
            v.axiom_id for r in history for v in r.constraint_result.violations
        )
        return [
            Pattern(
                pattern_kind=PatternKind.RECURRING_VIOLATION,
                detail=axiom_id,
                severity=Severity.HIGH,
                frequency=count,
            )
            for axiom_id, count in tally.items()
            if count >= self.recurring_threshold
        ]
