"""
HumanMeter — Engine Types

The analysis record and the verdict enums the engine derives from the
analyzer outputs. A record is created only by the engine (or validated
on import) and is immutable once returned. Validation recomputes every
derived verdict from the record's own fields, so a record whose fields
contradict each other never enters a session.
"""

from __future__ import annotations

import enum
import math
from datetime import datetime

from pydantic import Field, model_validator

from humanmeter.primitives.common import FrozenModel, Severity
from humanmeter.primitives.statement import StatementContext
from humanmeter.systems.classifier.agents import ClassificationResult
from humanmeter.systems.constraints.evaluator import ConstraintResult, overall_confidence
from humanmeter.systems.drift.tracker import DriftSummary
from humanmeter.systems.patterns.recognizer import Pattern
from humanmeter.systems.physics.analyzer import PhysicsMetrics
from humanmeter.systems.shadow.translator import ShadowResult
from humanmeter.systems.simulation.consequence import ConsequenceOutcome
from humanmeter.systems.temporal.projector import TemporalProjection


class IntegrityStatus(str, enum.Enum):
    OPTIMAL = "OPTIMAL"
    STABLE = "STABLE"
    STRESSED = "STRESSED"
    CRITICAL = "CRITICAL"
    FAILING = "FAILING"


class OverallStatus(str, enum.Enum):
    HALT = "HALT"
    HALT_RECLASSIFY = "HALT_RECLASSIFY"
    PROCEED_SANDBOX = "PROCEED_SANDBOX"
    PROCEED = "PROCEED"


# Lower bounds, highest first.
INTEGRITY_THRESHOLDS: tuple[tuple[float, IntegrityStatus], ...] = (
    (80.0, IntegrityStatus.OPTIMAL),
    (60.0, IntegrityStatus.STABLE),
    (40.0, IntegrityStatus.STRESSED),
    (20.0, IntegrityStatus.CRITICAL),
)


def integrity_status(integrity: float) -> IntegrityStatus:
    for floor, status in INTEGRITY_THRESHOLDS:
        if integrity >= floor:
            return status
    return IntegrityStatus.FAILING


_HALT_BELOW = 20.0
_SANDBOX_BELOW = 50.0
_MIN_CONSENSUS = 0.5


def determine_status(
    classification: ClassificationResult,
    constraints: ConstraintResult,
    integrity: float,
) -> OverallStatus:
    """First matching rule wins."""
    if constraints.has_critical:
        return OverallStatus.HALT
    if integrity < _HALT_BELOW:
        return OverallStatus.HALT
    if classification.consensus_strength < _MIN_CONSENSUS:
        return OverallStatus.HALT_RECLASSIFY
    if integrity < _SANDBOX_BELOW:
        return OverallStatus.PROCEED_SANDBOX
    return OverallStatus.PROCEED


class RepairProtocol(FrozenModel):
    priority: int = Field(ge=1)
    action: str
    instruction: str
    severity: Severity | None = None


class AnalysisRecord(FrozenModel):
    """One complete analysis of one statement."""

    id: str
    timestamp: datetime
    input_text: str
    context: StatementContext
    classification: ClassificationResult
    constraint_result: ConstraintResult
    physics_metrics: PhysicsMetrics
    shadow_result: ShadowResult
    integrity: float = Field(ge=0.0, le=100.0)
    integrity_status: IntegrityStatus
    overall_status: OverallStatus
    temporal_projections: tuple[TemporalProjection, ...] = ()
    consequence_outcomes: tuple[ConsequenceOutcome, ...] = ()
    repair_protocols: tuple[RepairProtocol, ...] = ()
    drift_summary: DriftSummary | None = None
    patterns: tuple[Pattern, ...] = ()

    @model_validator(mode="after")
    def _status_matches_integrity(self) -> AnalysisRecord:
        expected = integrity_status(self.integrity)
        if self.integrity_status is not expected:
            raise ValueError(
                f"integrity_status {self.integrity_status.value} inconsistent with "
                f"integrity {self.integrity} (expected {expected.value})"
            )
        return self

    @model_validator(mode="after")
    def _consensus_matches_verdicts(self) -> AnalysisRecord:
        verdicts = self.classification.verdicts
        if not verdicts:
            raise ValueError("classification carries no agent verdicts")
        agreeing = sum(1 for v in verdicts if v.category is self.classification.category)
        expected = agreeing / len(verdicts)
        if not math.isclose(self.classification.consensus_strength, expected):
            raise ValueError(
                f"consensus_strength {self.classification.consensus_strength} inconsistent "
                f"with {agreeing} of {len(verdicts)} verdicts (expected {expected})"
            )
        return self

    @model_validator(mode="after")
    def _confidence_matches_violations(self) -> AnalysisRecord:
        n = len(self.constraint_result.violations)
        if not math.isclose(self.constraint_result.overall_confidence, overall_confidence(n)):
            raise ValueError(
                f"overall_confidence {self.constraint_result.overall_confidence} "
                f"inconsistent with {n} violations"
            )
        return self

    @model_validator(mode="after")
    def _overall_status_matches(self) -> AnalysisRecord:
        expected = determine_status(self.classification, self.constraint_result, self.integrity)
        if self.overall_status is not expected:
            raise ValueError(
                f"overall_status {self.overall_status.value} inconsistent with "
                f"record fields (expected {expected.value})"
            )
        return self

    @property
    def is_halted(self) -> bool:
        return self.overall_status in (OverallStatus.HALT, OverallStatus.HALT_RECLASSIFY)
