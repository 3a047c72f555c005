"""
HumanMeter — Engine Service

Single interface for:
- Analysis (the primary entry point)
- Batch comparison of several statements
- Record export / import / comparison
- Session statistics

The engine owns the analyzers, not the history. History lives in an
AnalysisSession the caller supplies; an engine keeps one default session
so single-user callers can ignore sessions entirely.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import numpy as np
import structlog

from humanmeter.engine.errors import MalformedRecordError, RecordNotFoundError
from humanmeter.engine.scoring import compute_integrity, determine_status, generate_repairs
from humanmeter.engine.serialization import deserialize_record, serialize_record
from humanmeter.engine.session import AnalysisSession
from humanmeter.engine.types import AnalysisRecord, integrity_status
from humanmeter.primitives.common import new_id, utc_now
from humanmeter.primitives.statement import StatementContext
from humanmeter.systems.classifier.agents import MultiAgentClassifier
from humanmeter.systems.constraints.evaluator import ConstraintEvaluator
from humanmeter.systems.drift.tracker import DriftTracker
from humanmeter.systems.patterns.recognizer import PatternRecognizer
from humanmeter.systems.physics.analyzer import PhysicsAnalyzer
from humanmeter.systems.shadow.translator import ShadowTranslator
from humanmeter.systems.simulation.consequence import ConsequenceSimulator
from humanmeter.systems.temporal.projector import TemporalProjector

if TYPE_CHECKING:
    from humanmeter.config import HumanMeterConfig

logger = structlog.get_logger()

ContextLike = StatementContext | Mapping[str, Any] | None


class HumanMeterEngine:
    """
    The analysis orchestrator.

    Per call: classifier, constraints, physics and shadow run on the text;
    integrity and status are derived from them; temporal projection and
    consequence simulation run against integrity; the draft record joins
    the history; drift and patterns are computed over that history.
    """

    def __init__(
        self,
        classifier: MultiAgentClassifier | None = None,
        constraints: ConstraintEvaluator | None = None,
        physics: PhysicsAnalyzer | None = None,
        shadow: ShadowTranslator | None = None,
        temporal: TemporalProjector | None = None,
        simulator: ConsequenceSimulator | None = None,
        drift: DriftTracker | None = None,
        patterns: PatternRecognizer | None = None,
        session: AnalysisSession | None = None,
    ) -> None:
        self._classifier = classifier or MultiAgentClassifier()
        self._constraints = constraints or ConstraintEvaluator()
        self._physics = physics or PhysicsAnalyzer()
        self._shadow = shadow or ShadowTranslator()
        self._temporal = temporal or TemporalProjector()
        self._simulator = simulator or ConsequenceSimulator()
        self._drift = drift or DriftTracker()
        self._patterns = patterns or PatternRecognizer()
        self._session = session if session is not None else AnalysisSession()
        self._logger = logger.bind(component="engine")

    @classmethod
    def from_config(
        cls,
        config: HumanMeterConfig,
        session: AnalysisSession | None = None,
        rng: np.random.Generator | None = None,
    ) -> HumanMeterEngine:
        sim = config.simulation
        return cls(
            simulator=ConsequenceSimulator(
                trials=sim.trials,
                noise_amplitude=sim.noise_amplitude,
                rng=rng,
                seed=sim.seed,
            ),
            drift=DriftTracker(
                window_size=config.drift.window_size,
                trend_threshold=config.drift.trend_threshold,
                warning_average=config.drift.warning_average,
            ),
            patterns=PatternRecognizer(
                min_history=config.patterns.min_history,
                recurring_threshold=config.patterns.recurring_threshold,
                drift_min_history=config.patterns.drift_min_history,
            ),
            session=session,
        )

    @property
    def session(self) -> AnalysisSession:
        return self._session

    def _resolve(self, session: AnalysisSession | None) -> AnalysisSession:
        # An empty session is falsy (it has __len__), so test for None explicitly.
        return self._session if session is None else session

    # ─── Analysis ─────────────────────────────────────────────────

    def analyze(
        self,
        text: str,
        context: ContextLike = None,
        session: AnalysisSession | None = None,
    ) -> AnalysisRecord:
        """
        Analyze one statement and append the record to the session.
        Never fails on any string input or context mapping.
        """
        session = self._resolve(session)
        draft = self._draft(text, StatementContext.coerce(context))

        with session.locked():
            record = self._finalize(draft, session.snapshot())
            session.append(record)

        self._logger.info(
            "analysis_complete",
            session_id=session.session_id,
            record_id=record.id,
            integrity=round(record.integrity, 2),
            status=record.overall_status.value,
            violations=len(record.constraint_result.violations),
            history_size=len(session),
        )
        return record

    def evaluate(
        self,
        text: str,
        context: ContextLike,
        history: Sequence[AnalysisRecord],
    ) -> tuple[AnalysisRecord, tuple[AnalysisRecord, ...]]:
        """
        Pure form of ``analyze``: returns the record and the history that
        would result, mutating nothing. Consequence outcomes still draw from
        the engine's random generator.
        """
        draft = self._draft(text, StatementContext.coerce(context))
        existing = tuple(history)
        record = self._finalize(draft, existing)
        return record, (*existing, record)

    def analyze_batch(
        self,
        texts: Iterable[str],
        context: ContextLike = None,
        session: AnalysisSession | None = None,
    ) -> list[AnalysisRecord]:
        """Analyze each non-blank text in order, in the same session."""
        ctx = StatementContext.coerce(context)
        return [self.analyze(text, ctx, session) for text in texts if text.strip()]

    def _draft(self, text: str, context: StatementContext) -> AnalysisRecord:
        classification = self._classifier.classify(text)
        constraint_result = self._constraints.evaluate(text, context)
        physics = self._physics.analyze(text)
        shadow = self._shadow.translate(text)

        integrity = compute_integrity(text, classification, constraint_result, physics)

        return AnalysisRecord(
            id=new_id(),
            timestamp=utc_now(),
            input_text=text,
            context=context,
            classification=classification,
            constraint_result=constraint_result,
            physics_metrics=physics,
            shadow_result=shadow,
            integrity=integrity,
            integrity_status=integrity_status(integrity),
            overall_status=determine_status(classification, constraint_result, integrity),
            temporal_projections=self._temporal.project(classification, physics, integrity),
            consequence_outcomes=self._simulator.simulate(integrity),
            repair_protocols=generate_repairs(constraint_result, physics),
        )

    def _finalize(
        self,
        draft: AnalysisRecord,
        history: Sequence[AnalysisRecord],
    ) -> AnalysisRecord:
        """Drift and patterns see a history that already holds the draft."""
        with_draft = (*history, draft)
        return draft.model_copy(update={
            "drift_summary": self._drift.calculate(with_draft),
            "patterns": tuple(self._patterns.recognize(with_draft)),
        })

    # ─── Export / Import / Compare ────────────────────────────────

    def export_record(
        self,
        record_id: str,
        session: AnalysisSession | None = None,
    ) -> str | None:
        session = self._resolve(session)
        try:
            return serialize_record(session.get(record_id))
        except RecordNotFoundError:
            self._logger.info("record_export_not_found", record_id=record_id)
            return None

    def import_record(
        self,
        payload: str | bytes,
        session: AnalysisSession | None = None,
    ) -> AnalysisRecord | None:
        """
        Append a serialized record as-is: id, timestamp and computed fields
        are preserved, not recomputed. Returns None when the payload is
        malformed or its id already exists in the session.
        """
        session = self._resolve(session)
        try:
            record = deserialize_record(payload)
            session.append(record)
        except MalformedRecordError as exc:
            self._logger.warning(
                "record_import_rejected",
                session_id=session.session_id,
                reason=str(exc),
            )
            return None

        self._logger.info("record_imported", session_id=session.session_id, record_id=record.id)
        return record

    def compare(
        self,
        record_ids: Iterable[str],
        session: AnalysisSession | None = None,
    ) -> list[AnalysisRecord]:
        """Records for the known ids, in the order requested."""
        session = self._resolve(session)
        found: list[AnalysisRecord] = []
        for record_id in record_ids:
            record = session.find(record_id)
            if record is not None:
                found.append(record)
        return found

    def session_stats(self, session: AnalysisSession | None = None) -> dict[str, Any]:
        session = self._resolve(session)
        records = session.snapshot()
        if not records:
            return {
                "session_id": session.session_id,
                "record_count": 0,
                "average_integrity": None,
                "status_distribution": {},
                "latest_record_id": None,
            }
        statuses = Counter(r.overall_status.value for r in records)
        return {
            "session_id": session.session_id,
            "record_count": len(records),
            "average_integrity": round(sum(r.integrity for r in records) / len(records), 4),
            "status_distribution": dict(statuses),
            "latest_record_id": records[-1].id,
        }
