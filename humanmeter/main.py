"""
HumanMeter — Application Entry Point

FastAPI application exposing the analysis engine per client session.

`uvicorn humanmeter.main:app`
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any

import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env file before any configuration is loaded
load_dotenv()

from humanmeter.api.routers.analysis import router as analysis_router  # noqa: E402
from humanmeter.api.sessions import SessionRegistry  # noqa: E402
from humanmeter.config import HumanMeterConfig, load_config  # noqa: E402
from humanmeter.engine.service import HumanMeterEngine  # noqa: E402
from humanmeter.telemetry.logging import setup_logging  # noqa: E402

logger = structlog.get_logger()


def _config_path() -> str:
    return os.environ.get("HUMANMETER_CONFIG_PATH", "config/default.yaml")


def init_state(app: FastAPI, config: HumanMeterConfig) -> None:
    """Wire config, engine and session registry onto app.state."""
    app.state.config = config
    app.state.engine = HumanMeterEngine.from_config(config)
    app.state.sessions = SessionRegistry(max_sessions=config.sessions.max_sessions)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown sequence."""
    # ── 1. Load configuration ─────────────────────────────────
    config = load_config(_config_path())

    # ── 2. Set up logging ─────────────────────────────────────
    setup_logging(config.logging, instance_id=config.instance_id)

    # ── 3. Engine + sessions ──────────────────────────────────
    init_state(app, config)
    logger.info(
        "humanmeter_started",
        instance_id=config.instance_id,
        simulation_trials=config.simulation.trials,
        seeded=config.simulation.seed is not None,
    )

    yield

    logger.info("humanmeter_stopped", live_sessions=len(app.state.sessions))


app = FastAPI(
    title="HumanMeter",
    description="Structural integrity scoring for free text",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=load_config(_config_path()).server.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router)


@app.get("/health")
async def health() -> dict[str, Any]:
    config: HumanMeterConfig | None = getattr(app.state, "config", None)
    sessions: SessionRegistry | None = getattr(app.state, "sessions", None)
    return {
        "status": "healthy" if config is not None else "starting",
        "instance_id": config.instance_id if config is not None else None,
        "live_sessions": len(sessions) if sessions is not None else 0,
    }
