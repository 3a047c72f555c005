"""
HumanMeter — Temporal Projector

Projects how likely a statement is to still hold up after one hour, one
day and one week. Disorder (entropy) and brittleness (low resilience)
speed up the decay; the classification nudges the result.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pydantic import Field

from humanmeter.primitives.common import Category, FrozenModel, clamp, round_half_up
from humanmeter.systems.classifier.agents import ClassificationResult
from humanmeter.systems.physics.analyzer import PhysicsMetrics


@dataclass(frozen=True)
class Horizon:
    name: str
    hours: int
    base_confidence: float


HORIZONS: tuple[Horizon, ...] = (
    Horizon("immediate", 1, 0.9),
    Horizon("short", 24, 0.7),
    Horizon("medium", 168, 0.5),
)

_CATEGORY_MULTIPLIERS: dict[Category, float] = {
    Category.FACT: 1.1,
    Category.LIE: 0.3,
}


class TemporalProjection(FrozenModel):
    horizon_name: str
    horizon_hours: int
    probability: int = Field(ge=1, le=99)
    base_confidence: float


def decay_factor(physics: PhysicsMetrics) -> float:
    return 2 * physics.entropy.normalized + (1 - physics.resilience.normalized)


class TemporalProjector:
    def __init__(self, horizons: tuple[Horizon, ...] = HORIZONS) -> None:
        self._horizons = horizons

    def project(
        self,
        classification: ClassificationResult,
        physics: PhysicsMetrics,
        integrity: float,
    ) -> list[TemporalProjection]:
        decay = decay_factor(physics)
        multiplier = _CATEGORY_MULTIPLIERS.get(classification.category, 1.0)

        projections: list[TemporalProjection] = []
        for horizon in self._horizons:
            probability = math.exp(-decay * horizon.hours / 24) * (integrity / 100) * multiplier
            projections.append(TemporalProjection(
                horizon_name=horizon.name,
                horizon_hours=horizon.hours,
                probability=round_half_up(clamp(probability * 100, 1, 99)),
                base_confidence=horizon.base_confidence,
            ))
        return projections
