"""
HumanMeter — Structural integrity scoring for free text.

Runs a statement through a battery of independent lexical heuristics,
combines them multiplicatively into an integrity score and a verdict,
and tracks drift and recurring failure patterns across a session.
"""

from humanmeter.engine import AnalysisRecord, AnalysisSession, HumanMeterEngine
from humanmeter.primitives.statement import Domain, StatementContext

__all__ = [
    "AnalysisRecord",
    "AnalysisSession",
    "Domain",
    "HumanMeterEngine",
    "StatementContext",
]
