"""HumanMeter — Monte Carlo consequence simulation."""

from humanmeter.systems.simulation.consequence import (
    ConsequenceOutcome,
    ConsequenceSimulator,
    OutcomeKind,
    classify_outcome,
    largest_remainder_percentages,
)

__all__ = [
    "ConsequenceOutcome",
    "ConsequenceSimulator",
    "OutcomeKind",
    "classify_outcome",
    "largest_remainder_percentages",
]
