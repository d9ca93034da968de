"""Job sources: where the cron command gets its job list from."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pydantic import ValidationError

from cronlens.config.constants import SOURCE_GATEWAY, SOURCE_STORE
from cronlens.gateway.client import GatewayClient, GatewayError
from cronlens.scheduler.models import CronJob, CronJobList, describe_validation_error
from cronlens.scheduler.store import load_cron_store, resolve_cron_store_path

if TYPE_CHECKING:
    from cronlens.config.settings import Settings

logger = logging.getLogger("cronlens.scheduler.sources")

CRON_LIST_TOOL = "cron.list"


class JobSource(Protocol):
    """Anything that can produce a fresh, ordered snapshot of cron jobs."""

    async def list_jobs(self, include_disabled: bool = True) -> list[CronJob]: ...


class StoreJobSource:
    """Reads jobs from the local JSON store on every call."""

    name = SOURCE_STORE

    def __init__(self, path: Path) -> None:
        self.path = path

    async def list_jobs(self, include_disabled: bool = True) -> list[CronJob]:
        store = await load_cron_store(self.path)
        if include_disabled:
            return list(store.jobs)
        return [job for job in store.jobs if job.enabled]


class GatewayJobSource:
    """Fetches jobs from the remote registry with one ``cron.list`` call."""

    name = SOURCE_GATEWAY

    def __init__(self, client: GatewayClient) -> None:
        self.client = client

    async def list_jobs(self, include_disabled: bool = True) -> list[CronJob]:
        result = await self.client.call(
            CRON_LIST_TOOL, {"includeDisabled": include_disabled}
        )
        if result is None:
            return []
        try:
            return CronJobList.model_validate(result).jobs
        except ValidationError as exc:
            raise GatewayError(
                f"malformed {CRON_LIST_TOOL} result: {describe_validation_error(exc)}"
            ) from exc


def build_job_source(settings: Settings) -> StoreJobSource | GatewayJobSource:
    """Create the job source selected by ``settings.cron.source``."""
    source = settings.cron.source
    if source == SOURCE_STORE:
        path = resolve_cron_store_path(settings.cron.store)
        logger.debug("Using cron store at %s", path)
        return StoreJobSource(path)
    if source == SOURCE_GATEWAY:
        logger.debug("Using gateway job registry at %s", settings.gateway.url)
        return GatewayJobSource(GatewayClient.from_settings(settings))
    raise ValueError(f"Unknown cron job source: {source!r}")
