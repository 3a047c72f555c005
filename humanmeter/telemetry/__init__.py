"""HumanMeter — Telemetry: structured logging setup."""
