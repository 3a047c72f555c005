"""
HumanMeter — Engine Error Hierarchy

Neither error is fatal. The engine surface recovers both locally:

  MalformedRecordError  → import_record returns None
  RecordNotFoundError   → export_record returns None, compare drops the id
"""

from __future__ import annotations


class HumanMeterError(RuntimeError):
    """Base for all HumanMeter engine errors."""


class MalformedRecordError(HumanMeterError):
    """
    A serialized record could not be accepted into a session.

    Raised for invalid JSON, a payload that fails model validation
    (including out-of-range scores, or a status, consensus or confidence
    that does not follow from the record's own fields), or an id already
    present in the target session.
    """


class RecordNotFoundError(HumanMeterError):
    """No record with the requested id exists in the session."""
