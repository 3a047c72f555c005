"""
HumanMeter — Common Primitives

Shared enums, base classes, and utilities used across all systems.
"""

from __future__ import annotations

import enum
import math
from datetime import datetime, timezone

from pydantic import BaseModel
from ulid import ULID


def new_id() -> str:
    """Generate a new ULID string. Time-sortable, globally unique."""
    return str(ULID())


def utc_now() -> datetime:
    """Current UTC time, timezone-aware."""
    return datetime.now(timezone.utc)


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


# ─── Enums ────────────────────────────────────────────────────────


class Severity(str, enum.Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MODERATE = "MODERATE"


class Category(str, enum.Enum):
    FACT = "FACT"
    SYMBOL = "SYMBOL"
    LIE = "LIE"
    IMAGINATION = "IMAGINATION"
    UNCLEAR = "UNCLEAR"


class RiskLevel(str, enum.Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


# ─── Base Models ──────────────────────────────────────────────────


class HMBaseModel(BaseModel):
    """Base model for all HumanMeter primitives."""

    model_config = {"populate_by_name": True, "from_attributes": True}


class FrozenModel(HMBaseModel):
    """Immutable result type. Every analyzer output derives from this."""

    model_config = {"populate_by_name": True, "from_attributes": True, "frozen": True}
