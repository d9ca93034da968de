"""FastAPI application factory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI

from cronlens import __version__
from cronlens.commands.cron import CronJobsCommand
from cronlens.scheduler.sources import build_job_source
from cronlens.server.lifespan import lifespan
from cronlens.server.routes.commands import commands_router
from cronlens.server.routes.health import health_router

if TYPE_CHECKING:
    from cronlens.config.settings import Settings

logger = logging.getLogger("cronlens.server")


def create_app(settings: Settings) -> FastAPI:
    """Build the FastAPI application.

    1. Creates the app with our lifespan
    2. Builds the configured job source and the /cron command handler
    3. Stores both on app.state for route handlers
    4. Registers the health and command routes
    """
    app = FastAPI(
        title="cronlens",
        version=__version__,
        description="Chat command endpoint that reports scheduled cron jobs",
        lifespan=lifespan,
    )

    job_source = build_job_source(settings)
    cron_command = CronJobsCommand(
        job_source, logger=logging.getLogger("cronlens.commands.cron")
    )

    app.state.settings = settings
    app.state.job_source = job_source
    app.state.cron_command = cron_command

    app.include_router(health_router)
    app.include_router(commands_router)
    return app
