"""HumanMeter — Shared primitives."""

from humanmeter.primitives.common import (
    Category,
    FrozenModel,
    HMBaseModel,
    RiskLevel,
    Severity,
    new_id,
    utc_now,
)
from humanmeter.primitives.statement import Domain, StatementContext

__all__ = [
    "Category",
    "Domain",
    "FrozenModel",
    "HMBaseModel",
    "RiskLevel",
    "Severity",
    "StatementContext",
    "new_id",
    "utc_now",
]
