"""HumanMeter — Analyzer systems run by the engine for every statement."""
