"""
HumanMeter — Axiom Catalog

Static rules a statement is tested against. The universal set always
applies; a domain set is appended to it (never replaces it) when the
context names that domain.

Each axiom is one of a closed set of kinds:
  TEXT_PATTERN   — violated when a pattern matches the lowercased text
  CONTEXT_LIMIT  — violated when a numeric context field exceeds a limit

The registry is built once at import and is read-only afterwards.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from types import MappingProxyType

from humanmeter.primitives.common import Severity
from humanmeter.primitives.statement import Domain, StatementContext


class AxiomKind(str, enum.Enum):
    TEXT_PATTERN = "text_pattern"
    CONTEXT_LIMIT = "context_limit"


@dataclass(frozen=True)
class Axiom:
    """A named, domain-scoped rule. ``violated_by`` dispatches on ``kind``."""

    id: str
    statement: str
    severity: Severity
    kind: AxiomKind
    domain: Domain = Domain.UNIVERSAL
    pattern: re.Pattern[str] | None = None
    context_field: str = ""
    limit: float = 0.0

    def violated_by(self, text: str, context: StatementContext) -> bool:
        if self.kind is AxiomKind.TEXT_PATTERN:
            return self.pattern is not None and self.pattern.search(text.lower()) is not None
        # CONTEXT_LIMIT
        return float(getattr(context, self.context_field)) > self.limit


def _text(
    axiom_id: str,
    statement: str,
    severity: Severity,
    pattern: str,
    domain: Domain = Domain.UNIVERSAL,
) -> Axiom:
    return Axiom(
        id=axiom_id,
        statement=statement,
        severity=severity,
        kind=AxiomKind.TEXT_PATTERN,
        domain=domain,
        pattern=re.compile(pattern),
    )


def _limit(
    axiom_id: str,
    statement: str,
    severity: Severity,
    context_field: str,
    limit: float,
) -> Axiom:
    if context_field not in StatementContext.model_fields:
        raise ValueError(f"Unknown context field for {axiom_id}: {context_field}")
    return Axiom(
        id=axiom_id,
        statement=statement,
        severity=severity,
        kind=AxiomKind.CONTEXT_LIMIT,
        context_field=context_field,
        limit=limit,
    )


# ─── The Catalog ──────────────────────────────────────────────────

UNIVERSAL_AXIOMS: tuple[Axiom, ...] = (
    _text("TIME-001", "Cause precedes effect", Severity.CRITICAL,
          r"effect.*cause|consequence.*before"),
    _text("PHYS-001", "Energy cannot be created from nothing", Severity.CRITICAL,
          r"create.*energy.*nothing|perpetual.*motion"),
    _limit("PHYS-002", "Weight requires support", Severity.HIGH, "actual_load", 10),
    _limit("SOC-001", "Trust decays with distance", Severity.MODERATE, "trust_layers", 5),
    _text("SOC-002", "Agreement cannot be forced", Severity.HIGH,
          r"force.*agree|make.*believe|ensure.*alignment"),
)

DOMAIN_AXIOMS: MappingProxyType[Domain, tuple[Axiom, ...]] = MappingProxyType({
    Domain.MEDICAL: (
        _text("MED-001", "First, do no harm", Severity.CRITICAL,
              r"guarantee.*cure|miracle.*treatment", Domain.MEDICAL),
        _text("MED-002", "Informed consent required", Severity.HIGH,
              r"don't need to know|trust me|just do it", Domain.MEDICAL),
    ),
    Domain.LEGAL: (
        _text("LAW-001", "Innocent until proven guilty", Severity.CRITICAL,
              r"guilty until|prove innocence", Domain.LEGAL),
        _text("LAW-002", "Evidence must be admissible", Severity.HIGH,
              r"hearsay is proof|rumor confirms", Domain.LEGAL),
    ),
    Domain.ENGINEERING: (
        _text("ENG-001", "Safety factor required", Severity.CRITICAL,
              r"no margin needed|exactly at limit", Domain.ENGINEERING),
        _text("ENG-002", "Test before deployment", Severity.HIGH,
              r"deploy untested|skip validation", Domain.ENGINEERING),
    ),
})


def active_axioms(domain: Domain) -> tuple[Axiom, ...]:
    """Universal axioms followed by the domain's own, in declaration order."""
    if domain is Domain.UNIVERSAL:
        return UNIVERSAL_AXIOMS
    return UNIVERSAL_AXIOMS + DOMAIN_AXIOMS.get(domain, ())
