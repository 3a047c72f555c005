"""HumanMeter — Temporal projection of pass-probability over time horizons."""

from humanmeter.systems.temporal.projector import (
    HORIZONS,
    Horizon,
    TemporalProjection,
    TemporalProjector,
    decay_factor,
)

__all__ = ["HORIZONS", "Horizon", "TemporalProjection", "TemporalProjector", "decay_factor"]
