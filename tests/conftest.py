"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from cronlens.config.models import CommandsConfig, CronConfig
from cronlens.config.settings import Settings, get_settings

NOW_MS = 1_760_000_000_000.0


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from the real ~/.cronlens directory and env."""
    monkeypatch.setattr("cronlens.config.settings.CONFIG_FILE", tmp_path / "config.json")
    monkeypatch.setattr("cronlens.config.env_utils.ENV_FILE", tmp_path / ".env")
    monkeypatch.delenv("CRONLENS_GATEWAY_TOKEN", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now_ms() -> float:
    return NOW_MS


def job_record(**overrides: Any) -> dict:
    """A camelCase job record as found in the store file or gateway result."""
    record: dict[str, Any] = {
        "id": "job-backup",
        "name": "Backup",
        "enabled": True,
        "schedule": {"kind": "every", "everyMs": 3_600_000},
        "sessionTarget": "isolated",
        "payload": {"kind": "systemEvent", "text": "Run nightly backup"},
        "state": {
            "lastStatus": "ok",
            "lastRunAtMs": NOW_MS - 5_400_000,
            "nextRunAtMs": NOW_MS + 1_800_000,
        },
    }
    record.update(overrides)
    return record


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """A store file with two jobs, the second disabled."""
    path = tmp_path / "cron" / "jobs.json"
    path.parent.mkdir(parents=True)
    path.write_text(
        json.dumps(
            {
                "version": 1,
                "jobs": [
                    job_record(),
                    job_record(
                        id="job-digest",
                        name="Morning digest",
                        enabled=False,
                        schedule={"kind": "cron", "expr": "0 8 * * *", "tz": "Europe/Berlin"},
                        payload={"kind": "agentTurn", "message": "Summarize my inbox"},
                        state={},
                    ),
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def test_settings(store_path: Path) -> Settings:
    """Settings reading the temporary store, with one allowed sender."""
    return Settings(
        commands=CommandsConfig(allowed_senders=["alice"]),
        cron=CronConfig(source="store", store=str(store_path)),
    )


@pytest.fixture
def make_record():
    """Factory for camelCase job records (see ``job_record``)."""
    return job_record
