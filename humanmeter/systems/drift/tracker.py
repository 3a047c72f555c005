"""
HumanMeter — Drift Tracker

Short-window integrity trend over a session's history. Looks at the most
recent few analyses and reports whether the statements are getting
structurally better, worse, or holding steady.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import TYPE_CHECKING

from humanmeter.primitives.common import FrozenModel

if TYPE_CHECKING:
    from humanmeter.engine.types import AnalysisRecord

DEFAULT_WINDOW = 5
DEFAULT_TREND_THRESHOLD = 5.0
DEFAULT_WARNING_AVERAGE = 60.0


class Trend(str, enum.Enum):
    IMPROVING = "IMPROVING"
    DEGRADING = "DEGRADING"
    STABLE = "STABLE"


class DriftSummary(FrozenModel):
    average_integrity: float
    trend: Trend
    trend_delta: float
    critical_decay_warning: bool = False


class DriftTracker:
    """Stateless: every call recomputes from the history it is given."""

    def __init__(
        self,
        window_size: int = DEFAULT_WINDOW,
        trend_threshold: float = DEFAULT_TREND_THRESHOLD,
        warning_average: float = DEFAULT_WARNING_AVERAGE,
    ) -> None:
        if window_size < 2:
            raise ValueError("window_size must be at least 2")
        self.window_size = window_size
        self.trend_threshold = trend_threshold
        self.warning_average = warning_average

    def calculate(self, history: Sequence[AnalysisRecord]) -> DriftSummary | None:
        if len(history) < 2:
            return None

        window = history[-self.window_size:]
        average = sum(r.integrity for r in window) / len(window)
        delta = window[-1].integrity - window[0].integrity

        if delta > self.trend_threshold:
            trend = Trend.IMPROVING
        elif delta < -self.trend_threshold:
            trend = Trend.DEGRADING
        else:
            trend = Trend.STABLE

        return DriftSummary(
            average_integrity=average,
            trend=trend,
            trend_delta=delta,
            critical_decay_warning=average < self.warning_average and delta < 0,
        )
