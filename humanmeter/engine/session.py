"""
HumanMeter — Analysis Session

The caller-owned history of one logical session. Append-only: records are
never reordered, replaced or pruned here (eviction is the caller's job).

Every mutation, and every read that must see a consistent history, runs
under the session's lock. The engine uses ``locked()`` to make
"append, then read history for drift/patterns" one critical section.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from humanmeter.engine.errors import MalformedRecordError, RecordNotFoundError
from humanmeter.engine.types import AnalysisRecord
from humanmeter.primitives.common import new_id

logger = structlog.get_logger()


class AnalysisSession:
    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id or new_id()
        self._records: list[AnalysisRecord] = []
        self._index: dict[str, int] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[AnalysisRecord]:
        return iter(self.snapshot())

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._index

    @contextmanager
    def locked(self) -> Iterator[AnalysisSession]:
        with self._lock:
            yield self

    def snapshot(self) -> tuple[AnalysisRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def append(self, record: AnalysisRecord) -> None:
        with self._lock:
            if record.id in self._index:
                raise MalformedRecordError(
                    f"Record {record.id} already exists in session {self.session_id}"
                )
            self._index[record.id] = len(self._records)
            self._records.append(record)
        logger.debug("record_appended", session_id=self.session_id, record_id=record.id)

    def get(self, record_id: str) -> AnalysisRecord:
        with self._lock:
            position = self._index.get(record_id)
            if position is None:
                raise RecordNotFoundError(
                    f"Record {record_id} not found in session {self.session_id}"
                )
            return self._records[position]

    def find(self, record_id: str) -> AnalysisRecord | None:
        try:
            return self.get(record_id)
        except RecordNotFoundError:
            return None
