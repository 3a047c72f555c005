"""
Unit tests for HumanMeterEngine.

Covers the full analysis pipeline over sessions, the pure evaluate form,
batch analysis, export/import/compare and session statistics.
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from humanmeter.config import load_config
from humanmeter.engine.service import HumanMeterEngine
from humanmeter.engine.session import AnalysisSession
from humanmeter.engine.types import IntegrityStatus, OverallStatus
from humanmeter.primitives.common import Category, RiskLevel, Severity
from humanmeter.primitives.statement import Domain, StatementContext
from humanmeter.systems.drift.tracker import Trend
from humanmeter.systems.patterns.recognizer import PatternKind
from humanmeter.systems.simulation.consequence import ConsequenceSimulator

# Fields that do not depend on the input alone.
_VOLATILE = {"id", "timestamp", "consequence_outcomes", "drift_summary", "patterns"}


def _make_engine(seed: int = 7, **kwargs) -> HumanMeterEngine:
    return HumanMeterEngine(simulator=ConsequenceSimulator(seed=seed), **kwargs)


# ─── Tests: Analysis ──────────────────────────────────────────────────────────


class TestAnalyze:
    def test_plain_statement(self):
        engine = _make_engine()
        record = engine.analyze("hello world")
        assert record.integrity == pytest.approx(37.5)
        assert record.integrity_status == IntegrityStatus.CRITICAL
        assert record.overall_status == OverallStatus.PROCEED_SANDBOX
        assert record.classification.category == Category.UNCLEAR
        assert record.context == StatementContext()
        assert [p.probability for p in record.temporal_projections] == [35, 5, 1]
        assert record.repair_protocols == ()
        assert record.drift_summary is None
        assert record.patterns == ()
        assert len(engine.session) == 1

    def test_infinite_energy_device_halts(self):
        record = _make_engine().analyze(
            "This device creates infinite energy from nothing", {"domain": "engineering"},
        )
        assert record.context.domain == Domain.ENGINEERING
        assert [v.axiom_id for v in record.constraint_result.violations] == ["PHYS-001"]
        assert record.constraint_result.violations[0].severity == Severity.CRITICAL
        assert record.overall_status == OverallStatus.HALT
        assert record.is_halted
        assert record.integrity == pytest.approx(37.5 * math.exp(-0.3))
        assert [r.action for r in record.repair_protocols] == ["PHYS-001"]

    def test_empty_text(self):
        record = _make_engine().analyze("")
        assert record.physics_metrics.coherence.raw == 0.0
        assert record.physics_metrics.soundness == 75
        assert record.integrity == pytest.approx(37.5)
        assert record.shadow_result.transformed_text == ""

    def test_four_way_split_reclassifies(self):
        record = _make_engine().analyze("3 apples as symbols always")
        assert record.classification.consensus_strength == 0.25
        assert record.overall_status == OverallStatus.HALT_RECLASSIFY
        assert record.integrity == pytest.approx(100 * 0.85 * 0.51)

    def test_rigid_statement_is_repaired_and_halted(self):
        record = _make_engine().analyze("must must must must")
        assert record.integrity_status == IntegrityStatus.FAILING
        assert record.overall_status == OverallStatus.HALT
        assert [r.action for r in record.repair_protocols] == ["COHERENCE", "RIGIDITY"]
        assert record.shadow_result.risk_level == RiskLevel.HIGH

    @pytest.mark.parametrize("text,context", [
        ("\x00\x01", None),
        ("🔥" * 2000, {"actualLoad": "NaN"}),
        ("   ", {"trustLayers": -4, "domain": 42}),
        ("ALWAYS NEVER EVERY ALL NONE MUST NEED SHOULD", {"verificationLevel": "x"}),
    ])
    def test_never_fails(self, text, context):
        record = _make_engine().analyze(text, context)
        assert 0.0 <= record.integrity <= 100.0
        assert sum(o.probability_percent for o in record.consequence_outcomes) == 100

    def test_deterministic_apart_from_outcomes(self):
        text = "We must ensure safety; every measure could fail"
        first = _make_engine(seed=1).analyze(text, {"domain": "medical"})
        second = _make_engine(seed=2).analyze(text, {"domain": "medical"})
        assert first.model_dump(exclude=_VOLATILE) == second.model_dump(exclude=_VOLATILE)
        assert first.id != second.id

    def test_seeded_engines_agree_on_outcomes(self):
        config = load_config(overrides={"simulation": {"seed": 99}})
        first = HumanMeterEngine.from_config(config).analyze("hello world")
        second = HumanMeterEngine.from_config(config).analyze("hello world")
        assert first.consequence_outcomes == second.consequence_outcomes


# ─── Tests: Immutability ──────────────────────────────────────────────────────


class TestRecordImmutability:
    def test_collections_are_tuples(self):
        record = _make_engine().analyze("must must must must perpetual motion")
        assert isinstance(record.constraint_result.violations, tuple)
        assert isinstance(record.classification.verdicts, tuple)
        assert isinstance(record.classification.dissent, tuple)
        assert isinstance(record.temporal_projections, tuple)
        assert isinstance(record.consequence_outcomes, tuple)
        assert isinstance(record.repair_protocols, tuple)
        assert isinstance(record.patterns, tuple)

    def test_returned_record_cannot_alter_history(self):
        engine = _make_engine()
        record = engine.analyze("perpetual motion")
        violation = record.constraint_result.violations[0]

        with pytest.raises(AttributeError):
            record.constraint_result.violations.append(violation)
        with pytest.raises(ValidationError):
            record.patterns = ()

        stored = engine.session.get(record.id)
        assert len(stored.constraint_result.violations) == 1

        later = [engine.analyze("hello world") for _ in range(3)]
        assert all(p.pattern_kind != PatternKind.RECURRING_VIOLATION for p in later[-1].patterns)


class TestHistory:
    def test_decaying_session(self):
        engine = _make_engine()
        engine.analyze("hello world", {})
        second = engine.analyze("hello world", {"actualLoad": 20})
        third = engine.analyze("hello world", {"actualLoad": 20, "trustLayers": 10})

        assert second.drift_summary is not None
        assert second.patterns == ()
        assert third.integrity == pytest.approx(37.5 * math.exp(-0.6))

        drift = third.drift_summary
        assert drift.trend == Trend.DEGRADING
        assert drift.critical_decay_warning is True
        assert drift.trend_delta == pytest.approx(37.5 * math.exp(-0.6) - 37.5)

        assert [p.pattern_kind for p in third.patterns] == [PatternKind.PROGRESSIVE_DECAY]
        assert third.patterns[0].severity == Severity.CRITICAL

    def test_recurring_violation(self):
        engine = _make_engine()
        records = [engine.analyze("perpetual motion") for _ in range(3)]
        assert [p.detail for p in records[-1].patterns] == ["PHYS-001"]
        assert records[-1].patterns[0].frequency == 3

    def test_sessions_are_independent(self):
        engine = _make_engine()
        alpha, beta = AnalysisSession("alpha"), AnalysisSession("beta")
        engine.analyze("one", session=alpha)
        engine.analyze("two", session=alpha)
        record = engine.analyze("three", session=beta)
        assert record.drift_summary is None
        assert (len(alpha), len(beta), len(engine.session)) == (2, 1, 0)

    def test_empty_session_argument_is_used(self):
        engine = _make_engine()
        session = AnalysisSession()
        engine.analyze("hello", session=session)
        assert len(session) == 1
        assert len(engine.session) == 0

    def test_concurrent_appends(self):
        engine = _make_engine()
        session = AnalysisSession()
        texts = [f"statement number {i}" for i in range(40)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            records = list(pool.map(lambda t: engine.analyze(t, session=session), texts))
        assert len(session) == 40
        assert len({r.id for r in records}) == 40
        assert sum(1 for r in session if r.drift_summary is None) == 1


class TestEvaluate:
    def test_pure(self):
        engine = _make_engine()
        history = (engine.analyze("first"), engine.analyze("second"))
        record, new_history = engine.evaluate("third", None, history)
        assert new_history == (*history, record)
        assert len(engine.session) == 2
        assert record.drift_summary is not None

    def test_empty_history(self):
        record, new_history = _make_engine().evaluate("hello world", {}, [])
        assert new_history == (record,)
        assert record.drift_summary is None


class TestAnalyzeBatch:
    def test_skips_blank_texts(self):
        engine = _make_engine()
        records = engine.analyze_batch(["hello world", "   ", "", "I observe 3 birds"])
        assert [r.input_text for r in records] == ["hello world", "I observe 3 birds"]
        assert len(engine.session) == 2

    def test_shares_context(self):
        records = _make_engine().analyze_batch(["a", "b"], {"trustLayers": 9})
        assert all(r.constraint_result.violations[0].axiom_id == "SOC-001" for r in records)
        assert records[1].drift_summary is not None


# ─── Tests: Export / Import / Compare ─────────────────────────────────────────


class TestExportImport:
    def test_export_unknown_id(self):
        assert _make_engine().export_record("missing") is None

    def test_round_trip_into_another_session(self):
        engine = _make_engine()
        record = engine.analyze("Trust me, we must align", {"domain": "medical"})
        payload = engine.export_record(record.id)
        other = AnalysisSession()
        imported = engine.import_record(payload, session=other)
        assert imported == record
        assert other.get(record.id) == record

    def test_import_preserves_computed_fields(self):
        source = _make_engine()
        for text in ("one", "two", "three"):
            record = source.analyze(text)
        target = _make_engine()
        imported = target.import_record(source.export_record(record.id))
        assert imported.drift_summary == record.drift_summary
        assert imported.timestamp == record.timestamp

    def test_duplicate_import_is_rejected(self):
        engine = _make_engine()
        record = engine.analyze("hello world")
        assert engine.import_record(engine.export_record(record.id)) is None
        assert len(engine.session) == 1

    def test_malformed_import_is_rejected(self):
        engine = _make_engine()
        assert engine.import_record("{broken") is None
        assert engine.import_record("") is None
        assert len(engine.session) == 0

    def test_imported_record_feeds_history(self):
        source = _make_engine()
        record = source.analyze("hello world")
        target = _make_engine()
        target.import_record(source.export_record(record.id))
        assert target.analyze("hello world").drift_summary is not None


class TestCompare:
    def test_keeps_requested_order_and_drops_unknown(self):
        engine = _make_engine()
        a, b, c = (engine.analyze(t) for t in ("a", "b", "c"))
        assert engine.compare([c.id, "ghost", a.id]) == [c, a]
        assert engine.compare([]) == []
        assert b in engine.compare([b.id])


class TestSessionStats:
    def test_empty(self):
        stats = _make_engine().session_stats()
        assert stats["record_count"] == 0
        assert stats["average_integrity"] is None
        assert stats["status_distribution"] == {}

    def test_summary(self):
        engine = _make_engine()
        engine.analyze("hello world")
        last = engine.analyze("perpetual motion")
        stats = engine.session_stats()
        assert stats["session_id"] == engine.session.session_id
        assert stats["record_count"] == 2
        assert stats["status_distribution"] == {"PROCEED_SANDBOX": 1, "HALT": 1}
        assert stats["latest_record_id"] == last.id
        assert stats["average_integrity"] == pytest.approx((37.5 + last.integrity) / 2, abs=1e-4)
