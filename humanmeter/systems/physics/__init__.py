"""HumanMeter — Synthetic physics: lexical-statistical soundness metrics."""

from humanmeter.systems.physics.analyzer import (
    MetricValue,
    PhysicsAnalyzer,
    PhysicsMetrics,
    shannon_entropy,
)

__all__ = ["MetricValue", "PhysicsAnalyzer", "PhysicsMetrics", "shannon_entropy"]
