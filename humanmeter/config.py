"""
HumanMeter — Configuration System

All configuration is Pydantic-validated and loaded from:
1. default.yaml (defaults)
2. Environment variables (overrides)

Every tunable parameter of the engine lives here. The heuristic weights
inside the analyzers are fixed and are not configuration.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ─── Sub-configs ──────────────────────────────────────────────────


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])


class SimulationConfig(BaseModel):
    trials: int = 100
    noise_amplitude: float = 10.0
    # None = fresh entropy per engine. Set for reproducible outcome tables.
    seed: int | None = None

    @field_validator("trials")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        if value < 1:
            raise ValueError("simulation.trials must be >= 1")
        return value


class DriftConfig(BaseModel):
    window_size: int = 5
    trend_threshold: float = 5.0
    warning_average: float = 60.0


class PatternConfig(BaseModel):
    min_history: int = 3
    recurring_threshold: int = 3
    drift_min_history: int = 5


class SessionConfig(BaseModel):
    # Upper bound on live sessions held by the HTTP registry.
    max_sessions: int = 1000


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "console"  # "console" | "json"


# ─── Root Configuration ──────────────────────────────────────────


class HumanMeterConfig(BaseSettings):
    """
    Root configuration. Loads from YAML, overridable by env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="HUMANMETER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    instance_id: str = "humanmeter-default"

    server: ServerConfig = Field(default_factory=ServerConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    drift: DriftConfig = Field(default_factory=DriftConfig)
    patterns: PatternConfig = Field(default_factory=PatternConfig)
    sessions: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> HumanMeterConfig:
    """
    Load configuration from YAML file, then apply environment variable overrides.
    """
    raw: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}

    if instance_id := os.environ.get("HUMANMETER_INSTANCE_ID"):
        raw["instance_id"] = instance_id
    if seed := os.environ.get("HUMANMETER_SIMULATION__SEED"):
        raw.setdefault("simulation", {})["seed"] = int(seed)
    if log_level := os.environ.get("HUMANMETER_LOGGING__LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level
    if log_format := os.environ.get("HUMANMETER_LOGGING__FORMAT"):
        raw.setdefault("logging", {})["format"] = log_format

    if overrides:
        raw = _deep_merge(raw, overrides)

    return HumanMeterConfig(**raw)
