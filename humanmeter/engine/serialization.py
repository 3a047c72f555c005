"""
HumanMeter — Record Export / Import

Records travel as indented JSON. Import re-validates every field, so a
forged or hand-edited record with inconsistent values (integrity outside
[0, 100], a status or confidence that does not follow from the record's
own fields, out-of-range probabilities) is rejected instead of entering
history.
"""

from __future__ import annotations

from pydantic import ValidationError

from humanmeter.engine.errors import MalformedRecordError
from humanmeter.engine.types import AnalysisRecord


def serialize_record(record: AnalysisRecord) -> str:
    return record.model_dump_json(indent=2)


def deserialize_record(payload: str | bytes) -> AnalysisRecord:
    if not isinstance(payload, (str, bytes)) or not payload.strip():
        raise MalformedRecordError("Empty or non-text record payload")
    try:
        return AnalysisRecord.model_validate_json(payload)
    except ValidationError as exc:
        first = exc.errors()[0]["msg"]
        raise MalformedRecordError(
            f"Record failed validation ({exc.error_count()} errors): {first}"
        ) from exc
