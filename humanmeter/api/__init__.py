"""HumanMeter — HTTP surface."""
