"""
HumanMeter — Analysis REST Router

Exposes the engine per client session.

Endpoints:
  POST   /api/v1/sessions/{session_id}/analyze                     — analyze one statement
  POST   /api/v1/sessions/{session_id}/compare-texts               — analyze several statements
  GET    /api/v1/sessions/{session_id}/records/{record_id}/export  — serialized record
  POST   /api/v1/sessions/{session_id}/records/import              — append a serialized record
  POST   /api/v1/sessions/{session_id}/compare                     — records by id, in order
  GET    /api/v1/sessions/{session_id}/stats                       — history summary
  DELETE /api/v1/sessions/{session_id}                             — forget a session
  GET    /api/v1/axioms                                            — active axiom catalog
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from humanmeter.api.sessions import SessionRegistry
from humanmeter.engine.session import AnalysisSession
from humanmeter.engine.service import HumanMeterEngine
from humanmeter.primitives.statement import Domain
from humanmeter.systems.constraints.axioms import AxiomKind, active_axioms

router = APIRouter()


class AnalyzeRequest(BaseModel):
    text: str = ""
    context: dict[str, Any] = Field(default_factory=dict)


class CompareTextsRequest(BaseModel):
    texts: list[str] = Field(default_factory=list)
    context: dict[str, Any] = Field(default_factory=dict)


class ImportRequest(BaseModel):
    payload: str


class CompareRequest(BaseModel):
    record_ids: list[str] = Field(default_factory=list)


def _engine(request: Request) -> HumanMeterEngine:
    return request.app.state.engine


def _sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


@router.post("/api/v1/sessions/{session_id}/analyze")
def analyze(session_id: str, body: AnalyzeRequest, request: Request) -> dict[str, Any]:
    session = _sessions(request).get_or_create(session_id)
    record = _engine(request).analyze(body.text, body.context, session=session)
    return {"status": "ok", "data": record.model_dump(mode="json")}


@router.post("/api/v1/sessions/{session_id}/compare-texts")
def compare_texts(session_id: str, body: CompareTextsRequest, request: Request) -> dict[str, Any]:
    session = _sessions(request).get_or_create(session_id)
    records = _engine(request).analyze_batch(body.texts, body.context, session=session)
    return {"status": "ok", "data": [r.model_dump(mode="json") for r in records]}


@router.get("/api/v1/sessions/{session_id}/records/{record_id}/export")
def export_record(session_id: str, record_id: str, request: Request) -> dict[str, Any]:
    session = _sessions(request).get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    payload = _engine(request).export_record(record_id, session=session)
    if payload is None:
        raise HTTPException(status_code=404, detail=f"Record {record_id} not found")
    return {"status": "ok", "data": {"record_id": record_id, "payload": payload}}


@router.post("/api/v1/sessions/{session_id}/records/import")
def import_record(session_id: str, body: ImportRequest, request: Request) -> dict[str, Any]:
    session = _sessions(request).get_or_create(session_id)
    record = _engine(request).import_record(body.payload, session=session)
    if record is None:
        raise HTTPException(status_code=422, detail="Malformed record")
    return {"status": "ok", "data": record.model_dump(mode="json")}


@router.post("/api/v1/sessions/{session_id}/compare")
def compare(session_id: str, body: CompareRequest, request: Request) -> dict[str, Any]:
    session = _sessions(request).get(session_id)
    if session is None:
        return {"status": "ok", "data": []}
    records = _engine(request).compare(body.record_ids, session=session)
    return {"status": "ok", "data": [r.model_dump(mode="json") for r in records]}


@router.get("/api/v1/sessions/{session_id}/stats")
def session_stats(session_id: str, request: Request) -> dict[str, Any]:
    session = _sessions(request).get(session_id)
    if session is None:
        # Unknown ids report empty statistics without being registered.
        session = AnalysisSession(session_id)
    return {"status": "ok", "data": _engine(request).session_stats(session=session)}


@router.delete("/api/v1/sessions/{session_id}")
def drop_session(session_id: str, request: Request) -> dict[str, Any]:
    dropped = _sessions(request).drop(session_id)
    return {"status": "ok", "data": {"session_id": session_id, "dropped": dropped}}


@router.get("/api/v1/axioms")
def list_axioms(domain: Domain = Domain.UNIVERSAL) -> dict[str, Any]:
    return {
        "status": "ok",
        "data": [
            {
                "id": axiom.id,
                "statement": axiom.statement,
                "severity": axiom.severity.value,
                "domain": axiom.domain.value,
                "kind": axiom.kind.value,
                "rule": axiom.pattern.pattern if axiom.kind is AxiomKind.TEXT_PATTERN and axiom.pattern
                else f"{axiom.context_field} > {axiom.limit:g}",
            }
            for axiom in active_axioms(domain)
        ],
    }
