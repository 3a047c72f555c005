"""
HumanMeter — Consequence Simulator

Monte Carlo projection of what happens if a statement is acted on.
Each trial perturbs the integrity score with uniform noise and buckets
the result into an outcome; the tally becomes a probability table.

Design choices:
  - NumPy for the vectorised trial draw
  - The random generator is injected, so a seed gives reproducible tables
  - Percentages use the largest-remainder method and always sum to 100
  - This is the only non-deterministic analyzer in the pipeline
"""

from __future__ import annotations

import enum

import numpy as np
import structlog
from pydantic import Field

from humanmeter.primitives.common import FrozenModel

logger = structlog.get_logger()

DEFAULT_TRIALS = 100
DEFAULT_NOISE_AMPLITUDE = 10.0

# Upper bounds (exclusive) on the perturbed integrity for each failure bucket.
_CATASTROPHIC_BELOW = 30.0
_PARTIAL_BELOW = 50.0
_DEGRADED_BELOW = 70.0
_BOUNDS = (_CATASTROPHIC_BELOW, _PARTIAL_BELOW, _DEGRADED_BELOW)


class OutcomeKind(str, enum.Enum):
    SUCCESS = "SUCCESS"
    DEGRADED_SUCCESS = "DEGRADED_SUCCESS"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"
    CATASTROPHIC_FAILURE = "CATASTROPHIC_FAILURE"


class ConsequenceOutcome(FrozenModel):
    outcome_kind: OutcomeKind
    probability_percent: int = Field(ge=0, le=100)
    sample_count: int = Field(ge=0)


def classify_outcome(perturbed_integrity: float) -> OutcomeKind:
    """Outcome for one perturbed score. simulate groups trials by the same bounds."""
    if perturbed_integrity < _CATASTROPHIC_BELOW:
        return OutcomeKind.CATASTROPHIC_FAILURE
    if perturbed_integrity < _PARTIAL_BELOW:
        return OutcomeKind.PARTIAL_FAILURE
    if perturbed_integrity < _DEGRADED_BELOW:
        return OutcomeKind.DEGRADED_SUCCESS
    return OutcomeKind.SUCCESS


def largest_remainder_percentages(counts: list[int], total: int) -> list[int]:
    """Integer percentages proportional to counts that sum to exactly 100."""
    exact = [c * 100 / total for c in counts]
    floors = [int(e) for e in exact]
    shortfall = 100 - sum(floors)
    by_remainder = sorted(range(len(counts)), key=lambda i: exact[i] - floors[i], reverse=True)
    for i in by_remainder[:shortfall]:
        floors[i] += 1
    return floors


class ConsequenceSimulator:
    def __init__(
        self,
        trials: int = DEFAULT_TRIALS,
        noise_amplitude: float = DEFAULT_NOISE_AMPLITUDE,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        if trials < 1:
            raise ValueError("trials must be at least 1")
        self._trials = trials
        self._amplitude = noise_amplitude
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._logger = logger.bind(component="consequence_simulator")

    @property
    def trials(self) -> int:
        return self._trials

    def simulate(self, integrity: float) -> list[ConsequenceOutcome]:
        noise = self._rng.uniform(-self._amplitude, self._amplitude, size=self._trials)
        perturbed = integrity + noise
        bucket_index = np.digitize(perturbed, _BOUNDS, right=False)

        # Order of first appearance in the trial sequence breaks ties.
        _, first_seen, counts = np.unique(bucket_index, return_index=True, return_counts=True)
        appearance = np.argsort(first_seen, kind="stable")
        kinds = [classify_outcome(float(perturbed[first_seen[i]])) for i in appearance]
        tallies = [int(counts[i]) for i in appearance]

        percentages = largest_remainder_percentages(tallies, self._trials)
        outcomes = [
            ConsequenceOutcome(outcome_kind=kind, probability_percent=pct, sample_count=count)
            for kind, pct, count in zip(kinds, percentages, tallies)
        ]
        outcomes.sort(key=lambda o: o.probability_percent, reverse=True)

        self._logger.debug(
            "consequences_simulated",
            integrity=round(integrity, 3),
            trials=self._trials,
            top_outcome=outcomes[0].outcome_kind.value,
        )
        return outcomes
