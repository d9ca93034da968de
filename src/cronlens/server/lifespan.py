"""Application lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI

logger = logging.getLogger("cronlens.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown hooks for cronlens."""
    settings = app.state.settings

    logger.info(
        "cronlens server starting: source=%s, host=%s, port=%d",
        settings.job_source,
        settings.server.host,
        settings.server.port,
    )

    if not settings.commands.allowed_senders:
        logger.warning(
            "commands.allowed_senders is empty; every /cron request will be ignored. "
            'Add sender IDs (or "*") to ~/.cronlens/config.json.'
        )
    if not settings.config_exists():
        logger.info("No config file found; using defaults and environment variables.")
    if settings.job_source == "gateway" and not settings.gateway.token:
        logger.warning("Gateway source configured without a token (CRONLENS_GATEWAY_TOKEN).")

    app.state.started_at = datetime.now(UTC)

    yield

    logger.info("cronlens server shutting down.")
