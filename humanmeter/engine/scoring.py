"""
HumanMeter — Integrity Scoring & Verdict

Combines the independent analyzer outputs into one integrity score, an
overall status, and an ordered list of repairs.

Integrity starts at 100 and is multiplied by each analyzer's confidence
in turn, so any single weak signal pulls the whole score down.
"""

from __future__ import annotations

import re

from humanmeter.engine.types import RepairProtocol, determine_status
from humanmeter.primitives.common import clamp
from humanmeter.systems.classifier.agents import ClassificationResult
from humanmeter.systems.constraints.evaluator import ConstraintResult
from humanmeter.systems.physics.analyzer import PhysicsMetrics

_CARE_MARKERS = re.compile(r"love|care|protect", re.IGNORECASE)
_HOSTILE_MARKERS = re.compile(r"hate|threat|danger", re.IGNORECASE)
_CARE_DAMPER = 1.05
_HOSTILE_DAMPER = 0.95

# Physics repairs are only suggested below this soundness.
_REPAIR_SOUNDNESS = 70
_LOW_COHERENCE = 0.5
_HIGH_IMPEDANCE = 0.6

__all__ = ["compute_integrity", "determine_status", "generate_repairs"]


def compute_integrity(
    text: str,
    classification: ClassificationResult,
    constraints: ConstraintResult,
    physics: PhysicsMetrics,
) -> float:
    integrity = 100.0
    integrity *= classification.confidence
    integrity *= constraints.overall_confidence
    integrity *= physics.soundness / 100

    if _CARE_MARKERS.search(text):
        integrity *= _CARE_DAMPER
    if _HOSTILE_MARKERS.search(text):
        integrity *= _HOSTILE_DAMPER

    return clamp(integrity, 0.0, 100.0)


def generate_repairs(
    constraints: ConstraintResult,
    physics: PhysicsMetrics,
) -> list[RepairProtocol]:
    repairs: list[RepairProtocol] = []

    def _add(action: str, instruction: str, **extra: object) -> None:
        repairs.append(RepairProtocol(
            priority=len(repairs) + 1, action=action, instruction=instruction, **extra,
        ))

    for violation in constraints.violations:
        _add(violation.axiom_id, violation.repair_hint, severity=violation.severity)

    if physics.soundness < _REPAIR_SOUNDNESS:
        if physics.coherence.normalized < _LOW_COHERENCE:
            _add("COHERENCE", "Add logical connectives")
        if physics.impedance.normalized > _HIGH_IMPEDANCE:
            _add("RIGIDITY", "Add qualifiers")

    return repairs
