"""
HumanMeter — Statement Context Primitive

The per-call context a statement is judged in. Every field is optional:
a missing, malformed or out-of-range value falls back to its default
rather than failing the analysis.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping
from typing import Any

from pydantic import field_validator

from humanmeter.primitives.common import FrozenModel, clamp


class Domain(str, enum.Enum):
    UNIVERSAL = "universal"
    MEDICAL = "medical"
    LEGAL = "legal"
    ENGINEERING = "engineering"


_DEFAULT_LOAD = 1.0
_DEFAULT_TRUST_LAYERS = 1


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class StatementContext(FrozenModel):
    """Immutable context for a single analysis call."""

    domain: Domain = Domain.UNIVERSAL
    actual_load: float = _DEFAULT_LOAD
    trust_layers: int = _DEFAULT_TRUST_LAYERS
    verification_level: float | None = None

    @field_validator("domain", mode="before")
    @classmethod
    def _coerce_domain(cls, value: Any) -> Domain:
        if isinstance(value, Domain):
            return value
        try:
            return Domain(str(value).strip().lower())
        except ValueError:
            return Domain.UNIVERSAL

    @field_validator("actual_load", mode="before")
    @classmethod
    def _coerce_load(cls, value: Any) -> float:
        number = _as_number(value)
        if number is None or number <= 0:
            return _DEFAULT_LOAD
        return number

    @field_validator("trust_layers", mode="before")
    @classmethod
    def _coerce_trust_layers(cls, value: Any) -> int:
        number = _as_number(value)
        if number is None or number < 1:
            return _DEFAULT_TRUST_LAYERS
        return int(number)

    @field_validator("verification_level", mode="before")
    @classmethod
    def _coerce_verification(cls, value: Any) -> float | None:
        number = _as_number(value)
        if number is None:
            return None
        return clamp(number)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> StatementContext:
        """
        Build a context from a loosely-typed mapping.

        Accepts both snake_case and the camelCase keys used by the web
        client (``actualLoad``, ``trustLayers``, ``verificationLevel``).
        Unknown keys are ignored.
        """
        if not raw:
            return cls()
        aliases = {
            "actualLoad": "actual_load",
            "trustLayers": "trust_layers",
            "verificationLevel": "verification_level",
        }
        fields: dict[str, Any] = {}
        for key, value in raw.items():
            name = aliases.get(key, key)
            if name in cls.model_fields and value is not None:
                fields[name] = value
        return cls(**fields)

    @classmethod
    def coerce(cls, raw: StatementContext | Mapping[str, Any] | None) -> StatementContext:
        if isinstance(raw, StatementContext):
            return raw
        return cls.from_mapping(raw)
