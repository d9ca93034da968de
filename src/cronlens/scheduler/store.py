"""Read-only access to the JSON cron job store."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from cronlens.config.constants import CRON_FILE
from cronlens.scheduler.models import CronStoreFile, describe_validation_error

logger = logging.getLogger("cronlens.scheduler.store")


class CronStoreError(Exception):
    """The store file exists but could not be read or parsed."""


def resolve_cron_store_path(raw: str | None = None) -> Path:
    """Resolve the configured store path, falling back to the default file."""
    if raw and raw.strip():
        return Path(raw.strip()).expanduser().resolve()
    return CRON_FILE


def read_cron_store(path: Path) -> CronStoreFile:
    """Load the store from disk. A missing file is an empty store.

    Accepts the ``{"version": 1, "jobs": [...]}`` envelope or a bare list
    of job records.
    """
    if not path.exists():
        logger.debug("Cron store %s does not exist; treating as empty", path)
        return CronStoreFile()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CronStoreError(f"invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise CronStoreError(f"cannot read {path}: {exc}") from exc

    if isinstance(data, list):
        data = {"jobs": data}
    if not isinstance(data, dict):
        raise CronStoreError(f"unexpected store format in {path}: {type(data).__name__}")

    try:
        store = CronStoreFile.model_validate(data)
    except ValidationError as exc:
        raise CronStoreError(
            f"malformed job record in {path}: {describe_validation_error(exc)}"
        ) from exc

    logger.debug("Loaded %d cron jobs from %s", len(store.jobs), path)
    return store


async def load_cron_store(path: Path) -> CronStoreFile:
    """Async wrapper around :func:`read_cron_store` (reads in a worker thread)."""
    return await asyncio.to_thread(read_cron_store, path)
