"""
HumanMeter — Synthetic Physics Analyzer

Lexical statistics treated as physical properties of a statement:

  coherence   — share of unique tokens (low = repetitive)
  entropy     — Shannon entropy of the token distribution
  impedance   — rigidity from absolutist/obligatory markers, eased by hedges
  resilience  — share of tokens that are not rigid markers

Every division is floored at 1 so the analyzer is total over all strings,
including the empty one.
"""

from __future__ import annotations

import math
import re
from collections import Counter

from pydantic import Field

from humanmeter.primitives.common import FrozenModel, clamp, round_half_up

_ABSOLUTES = re.compile(r"always|never|every|all|none", re.IGNORECASE)
_OBLIGATIONS = re.compile(r"must|need|should", re.IGNORECASE)
_HEDGES = re.compile(r"maybe|perhaps|could", re.IGNORECASE)

# Marker weights for impedance.
_ABSOLUTE_WEIGHT = 10
_OBLIGATION_WEIGHT = 5
_HEDGE_WEIGHT = 3
# impedance.raw at which the normalised value saturates
_IMPEDANCE_SCALE = 50.0


class MetricValue(FrozenModel):
    raw: float
    normalized: float = Field(ge=0.0, le=1.0)


class PhysicsMetrics(FrozenModel):
    coherence: MetricValue
    entropy: MetricValue
    impedance: MetricValue
    resilience: MetricValue
    soundness: int = Field(ge=0, le=100)


def shannon_entropy(tokens: list[str]) -> float:
    if not tokens:
        return 0.0
    total = len(tokens)
    entropy = 0.0
    for count in Counter(tokens).values():
        p = count / total
        entropy -= p * math.log2(p)
    return entropy


class PhysicsAnalyzer:
    def analyze(self, text: str) -> PhysicsMetrics:
        tokens = text.lower().split()
        n = len(tokens)
        floor_n = max(n, 1)

        coherence = len(set(tokens)) / floor_n

        entropy = shannon_entropy(tokens)
        entropy_norm = entropy / max(math.log2(floor_n), 1.0)

        absolutes = len(_ABSOLUTES.findall(text))
        obligations = len(_OBLIGATIONS.findall(text))
        hedges = len(_HEDGES.findall(text))

        impedance = (
            absolutes * _ABSOLUTE_WEIGHT
            + obligations * _OBLIGATION_WEIGHT
            - hedges * _HEDGE_WEIGHT
        ) / max(len(text), 1) * 100
        impedance_norm = clamp(impedance / _IMPEDANCE_SCALE)

        resilience = 1 - (absolutes + obligations) / floor_n
        resilience_norm = clamp(resilience)

        components = (
            coherence,
            1 - min(1.0, entropy_norm),
            max(0.0, resilience),
            1 - impedance_norm,
        )
        soundness = round_half_up(sum(components) / len(components) * 100)

        return PhysicsMetrics(
            coherence=MetricValue(raw=coherence, normalized=coherence),
            entropy=MetricValue(raw=entropy, normalized=clamp(entropy_norm)),
            impedance=MetricValue(raw=impedance, normalized=impedance_norm),
            resilience=MetricValue(raw=resilience, normalized=resilience_norm),
            soundness=soundness,
        )
