"""
HumanMeter — Constraint Evaluator

Tests a statement against every active axiom. Pure: the same
(text, context) always yields the same result.
"""

from __future__ import annotations

import math

import structlog
from pydantic import field_validator

from humanmeter.primitives.common import FrozenModel, Severity
from humanmeter.primitives.statement import StatementContext
from humanmeter.systems.constraints.axioms import Axiom, active_axioms

logger = structlog.get_logger()

# Confidence lost per violation: overall = exp(-k * n)
_VIOLATION_DECAY = 0.3


class ConstraintViolation(FrozenModel):
    """A detected axiom violation."""

    axiom_id: str
    axiom_statement: str
    severity: Severity
    repair_hint: str

    @classmethod
    def from_axiom(cls, axiom: Axiom) -> ConstraintViolation:
        return cls(
            axiom_id=axiom.id,
            axiom_statement=axiom.statement,
            severity=axiom.severity,
            repair_hint=f"Reformulate to respect: {axiom.statement}",
        )


class ConstraintResult(FrozenModel):
    violations: tuple[ConstraintViolation, ...] = ()
    overall_confidence: float = 1.0

    @field_validator("overall_confidence")
    @classmethod
    def _in_unit_interval(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("overall_confidence must lie in (0, 1]")
        return value

    @property
    def has_critical(self) -> bool:
        return any(v.severity is Severity.CRITICAL for v in self.violations)


def overall_confidence(violation_count: int) -> float:
    return math.exp(-_VIOLATION_DECAY * violation_count)


class ConstraintEvaluator:
    """Evaluates the universal axioms plus those of the context's domain."""

    def evaluate(self, text: str, context: StatementContext) -> ConstraintResult:
        violations = [
            ConstraintViolation.from_axiom(axiom)
            for axiom in active_axioms(context.domain)
            if axiom.violated_by(text, context)
        ]
        if violations:
            logger.debug(
                "constraint_violations",
                domain=context.domain.value,
                axioms=[v.axiom_id for v in violations],
            )
        return ConstraintResult(
            violations=violations,
            overall_confidence=overall_confidence(len(violations)),
        )
