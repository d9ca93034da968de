"""Scheduler subsystem: job models, the store reader and job sources."""

from cronlens.scheduler.models import CronJob, CronJobList, CronStoreFile
from cronlens.scheduler.sources import (
    GatewayJobSource,
    JobSource,
    StoreJobSource,
    build_job_source,
)
from cronlens.scheduler.store import CronStoreError, load_cron_store, resolve_cron_store_path

__all__ = [
    "CronJob",
    "CronJobList",
    "CronStoreError",
    "CronStoreFile",
    "GatewayJobSource",
    "JobSource",
    "StoreJobSource",
    "build_job_source",
    "load_cron_store",
    "resolve_cron_store_path",
]
