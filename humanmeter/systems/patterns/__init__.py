"""HumanMeter — Recurring failure pattern recognition over session history."""

from humanmeter.systems.patterns.recognizer import Pattern, PatternKind, PatternRecognizer

__all__ = ["Pattern", "PatternKind", "PatternRecognizer"]
