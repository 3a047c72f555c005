"""HumanMeter — Constraints: axiom catalog and evaluator."""

from humanmeter.systems.constraints.axioms import (
    DOMAIN_AXIOMS,
    UNIVERSAL_AXIOMS,
    Axiom,
    AxiomKind,
    active_axioms,
)
from humanmeter.systems.constraints.evaluator import (
    ConstraintEvaluator,
    ConstraintResult,
    ConstraintViolation,
)

__all__ = [
    "Axiom",
    "AxiomKind",
    "ConstraintEvaluator",
    "ConstraintResult",
    "ConstraintViolation",
    "DOMAIN_AXIOMS",
    "UNIVERSAL_AXIOMS",
    "active_axioms",
]
