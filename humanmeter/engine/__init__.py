"""
HumanMeter — Engine

Orchestrates the analyzer systems, scores integrity, and manages
caller-owned session history.

Public interface:
  HumanMeterEngine  — analyze / export / import / compare
  AnalysisSession   — append-only history for one logical session
  AnalysisRecord    — the immutable result of one analysis
"""

from humanmeter.engine.errors import HumanMeterError, MalformedRecordError, RecordNotFoundError
from humanmeter.engine.service import HumanMeterEngine
from humanmeter.engine.session import AnalysisSession
from humanmeter.engine.types import (
    AnalysisRecord,
    IntegrityStatus,
    OverallStatus,
    RepairProtocol,
    integrity_status,
)

__all__ = [
    "AnalysisRecord",
    "AnalysisSession",
    "HumanMeterEngine",
    "HumanMeterError",
    "IntegrityStatus",
    "MalformedRecordError",
    "OverallStatus",
    "RecordNotFoundError",
    "RepairProtocol",
    "integrity_status",
]
