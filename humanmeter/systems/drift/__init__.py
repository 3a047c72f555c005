"""HumanMeter — Short-window integrity drift."""

from humanmeter.systems.drift.tracker import DriftSummary, DriftTracker, Trend

__all__ = ["DriftSummary", "DriftTracker", "Trend"]
