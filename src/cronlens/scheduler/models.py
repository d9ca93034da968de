"""Pydantic models for scheduled jobs.

Job records arrive as camelCase JSON (store file or ``cron.list`` result).
Schedules and payloads are closed tagged unions on ``kind``; any kind this
package does not know is parsed into an ``Unknown*`` variant instead of
failing the whole job list.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

LastStatus = Literal["ok", "error", "skipped"]

_SCHEDULE_KINDS = frozenset({"at", "every", "cron"})
_PAYLOAD_KINDS = frozenset({"agentTurn", "systemEvent"})


class _JobModel(BaseModel):
    """Accepts both camelCase (wire) and snake_case (Python) field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _nulls_are_missing(cls, data: Any) -> Any:
        """Treat explicit ``null`` fields like absent ones, so defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# -- Schedule -----------------------------------------------------------------


class AtSchedule(_JobModel):
    """Fires once at an absolute time."""

    kind: Literal["at"] = "at"
    at: Optional[Union[str, int]] = None


class EverySchedule(_JobModel):
    """Fires on a fixed period."""

    kind: Literal["every"] = "every"
    every_ms: int = 0


class CronSchedule(_JobModel):
    """Fires per a cron expression, optionally in a timezone."""

    kind: Literal["cron"] = "cron"
    expr: str = ""
    tz: Optional[str] = None


class UnknownSchedule(_JobModel):
    kind: Any = "unknown"


def _kind_of(value: Any) -> Any:
    if isinstance(value, dict):
        return value.get("kind")
    return getattr(value, "kind", None)


def _schedule_tag(value: Any) -> str:
    kind = _kind_of(value)
    return kind if kind in _SCHEDULE_KINDS else "unknown"


Schedule = Annotated[
    Union[
        Annotated[AtSchedule, Tag("at")],
        Annotated[EverySchedule, Tag("every")],
        Annotated[CronSchedule, Tag("cron")],
        Annotated[UnknownSchedule, Tag("unknown")],
    ],
    Discriminator(_schedule_tag),
]


# -- Payload ------------------------------------------------------------------


class AgentTurnPayload(_JobModel):
    """An agent invocation with a text prompt."""

    kind: Literal["agentTurn"] = "agentTurn"
    message: str = ""
    model: Optional[str] = None


class SystemEventPayload(_JobModel):
    """A system-level text event."""

    kind: Literal["systemEvent"] = "systemEvent"
    text: str = ""


class UnknownPayload(_JobModel):
    kind: Any = "unknown"


def _payload_tag(value: Any) -> str:
    kind = _kind_of(value)
    return kind if kind in _PAYLOAD_KINDS else "unknown"


Payload = Annotated[
    Union[
        Annotated[AgentTurnPayload, Tag("agentTurn")],
        Annotated[SystemEventPayload, Tag("systemEvent")],
        Annotated[UnknownPayload, Tag("unknown")],
    ],
    Discriminator(_payload_tag),
]


# -- Delivery / state ---------------------------------------------------------


class Delivery(_JobModel):
    """Where a job's output is announced after it runs."""

    mode: str = "none"
    channel: Optional[str] = None
    to: Optional[str] = None


class CronJobState(_JobModel):
    """Run status snapshot, owned by the scheduler that executes the job."""

    running_at_ms: Optional[float] = None
    last_run_at_ms: Optional[float] = None
    last_status: Optional[LastStatus] = None
    last_duration_ms: Optional[float] = None
    last_error: Optional[str] = None
    next_run_at_ms: Optional[float] = None

    @field_validator("last_status", mode="before")
    @classmethod
    def _unknown_status_is_absent(cls, value: Any) -> Any:
        return value if value in ("ok", "error", "skipped") else None


# -- Job ----------------------------------------------------------------------


def _tagged_or_unknown(value: Any) -> Any:
    if value is None or not isinstance(value, (dict, BaseModel)):
        return {"kind": "unknown"}
    return value


class CronJob(_JobModel):
    """A single scheduled job, as reported by the store or the gateway."""

    id: str = ""
    name: str = ""
    enabled: bool = True
    schedule: Schedule = Field(default_factory=UnknownSchedule)
    session_target: Optional[str] = None
    wake_mode: Optional[str] = None
    agent_id: Optional[str] = None
    auth_profile: Optional[str] = None
    payload: Payload = Field(default_factory=UnknownPayload)
    delivery: Optional[Delivery] = None
    state: CronJobState = Field(default_factory=CronJobState)

    @field_validator("schedule", "payload", mode="before")
    @classmethod
    def _coerce_variant(cls, value: Any) -> Any:
        return _tagged_or_unknown(value)

    @property
    def display_name(self) -> str:
        return self.name or self.id or "(unnamed)"


class CronJobList(_JobModel):
    """A sequence of jobs in source order (``cron.list`` result shape)."""

    jobs: list[CronJob] = Field(default_factory=list)


class CronStoreFile(CronJobList):
    """On-disk store envelope: ``{"version": 1, "jobs": [...]}``."""

    version: int = 1


def describe_validation_error(exc: ValidationError) -> str:
    """One-line summary of a job-record validation failure."""
    errors = exc.errors(include_url=False)
    if not errors:
        return "invalid job record"
    first = errors[0]
    where = ".".join(str(part) for part in first.get("loc", ())) or "record"
    more = f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""
    return f"{where}: {first.get('msg', 'invalid value')}{more}"
