"""Turn cron job snapshots into chat-friendly text.

Every function here is pure: the same job and ``now`` always give the same
text, and no input shape makes them raise. Missing fields drop their line or
render as ``n/a``.

Unit table (shared by schedules and relative times): values below a minute
are seconds, below an hour minutes, below a day hours, otherwise days.
Seconds and minutes are whole numbers; hours and days carry one decimal.
Every value is truncated, never rounded up, so a boundary cannot spill into
the next unit (59_999 ms is ``59s``, not ``60s``).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum
from typing import Any

from cronlens.scheduler.models import (
    AgentTurnPayload,
    AtSchedule,
    CronJob,
    CronSchedule,
    Delivery,
    EverySchedule,
    SystemEventPayload,
)

SECOND_MS = 1_000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS

PREVIEW_MAX_CHARS = 80
ELLIPSIS = "…"
NOT_AVAILABLE = "n/a"

REPORT_ICON = "🕐"
NO_JOBS_TEXT = f"{REPORT_ICON} No cron jobs configured."


class JobStatus(Enum):
    """Display status of a job, with its fixed icon and label."""

    DISABLED = ("⏸", "disabled")
    RUNNING = ("🔄", "running")
    OK = ("✅", "ok")
    ERROR = ("❌", "error")
    SKIPPED = ("⏭", "skipped")
    IDLE = ("⬜", "idle")

    def __init__(self, icon: str, label: str) -> None:
        self.icon = icon
        self.label = label


_LAST_STATUS_DOTS = {"ok": "🟢", "error": "🔴"}


# -- Units --------------------------------------------------------------------


def _tenths(value_ms: float, unit_ms: int) -> str:
    """*value_ms* in *unit_ms*, truncated to one decimal (``"1.5"``)."""
    tenths = int(value_ms // (unit_ms // 10))
    return f"{tenths // 10}.{tenths % 10}"


def _duration_label(abs_ms: float) -> str:
    if isinstance(abs_ms, float) and not math.isfinite(abs_ms):
        return NOT_AVAILABLE
    if abs_ms < MINUTE_MS:
        return f"{int(abs_ms // SECOND_MS)}s"
    if abs_ms < HOUR_MS:
        return f"{int(abs_ms // MINUTE_MS)}m"
    if abs_ms < DAY_MS:
        return f"{_tenths(abs_ms, HOUR_MS)}h"
    return f"{_tenths(abs_ms, DAY_MS)}d"


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints are exact; math.isfinite overflows on very large ones
    return isinstance(value, int) or math.isfinite(value)


# -- Schedule -----------------------------------------------------------------


def format_interval(every_ms: int) -> str:
    """Interval phrase for an ``every`` schedule (``"1h"``, ``"90m"`` is ``"1.5h"``)."""
    every_ms = max(int(every_ms), 0)
    if every_ms < SECOND_MS:
        return f"{every_ms}ms"
    label = _duration_label(every_ms)
    # Whole hours/days read better without the trailing ".0"
    return label.replace(".0h", "h").replace(".0d", "d")


def format_schedule(schedule: Any) -> str:
    """Short human phrase for a schedule variant."""
    if isinstance(schedule, AtSchedule):
        return f"at {schedule.at if schedule.at not in (None, '') else '?'}"
    if isinstance(schedule, EverySchedule):
        return f"every {format_interval(schedule.every_ms)}"
    if isinstance(schedule, CronSchedule):
        tz = f" ({schedule.tz})" if schedule.tz else ""
        return f"cron: {schedule.expr or '?'}{tz}"
    kind = getattr(schedule, "kind", None)
    return str(kind) if kind else "unknown"


# -- Relative time ------------------------------------------------------------


def format_relative(ms: Any, now_ms: float) -> str:
    """``"in 30m"`` / ``"1.5h ago"`` relative to *now_ms*; ``"n/a"`` when unknown."""
    if not _is_finite_number(ms):
        return NOT_AVAILABLE
    try:
        delta = ms - now_ms
    except OverflowError:
        return NOT_AVAILABLE
    if not _is_finite_number(delta):
        return NOT_AVAILABLE
    label = _duration_label(abs(delta))
    return f"in {label}" if delta >= 0 else f"{label} ago"


# -- Status -------------------------------------------------------------------


def classify_status(job: CronJob) -> JobStatus:
    """First match wins: disabled, running, ok, error, skipped, idle."""
    if not job.enabled:
        return JobStatus.DISABLED
    if job.state.running_at_ms is not None:
        return JobStatus.RUNNING
    last = job.state.last_status
    if last == "ok":
        return JobStatus.OK
    if last == "error":
        return JobStatus.ERROR
    if last == "skipped":
        return JobStatus.SKIPPED
    return JobStatus.IDLE


# -- Job block ----------------------------------------------------------------


def format_delivery(delivery: Delivery | None) -> str:
    """``"announce: telegram → 12345"``; empty when there is no delivery."""
    if delivery is None or not delivery.mode or delivery.mode == "none":
        return ""
    target = " → ".join(part for part in (delivery.channel, delivery.to) if part)
    return f"{delivery.mode}: {target}" if target else delivery.mode


def payload_preview(text: str) -> str:
    """First 80 characters on one line, with an ellipsis when cut."""
    flat = text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    preview = flat[:PREVIEW_MAX_CHARS]
    return preview + ELLIPSIS if len(flat) > PREVIEW_MAX_CHARS else preview


def render_job(job: CronJob, index: int, now_ms: float) -> str:
    """Multi-line block for one job; *index* is its 1-based position."""
    status = classify_status(job)
    lines = [
        f"{status.icon} *{index}. {job.display_name}*",
        f"📅 {format_schedule(job.schedule)}",
    ]

    if job.auth_profile:
        lines.append(f"🔑 Auth: {job.auth_profile}")

    payload = job.payload
    if isinstance(payload, AgentTurnPayload) and payload.model:
        lines.append(f"🤖 Model: {payload.model}")

    last_status = job.state.last_status or NOT_AVAILABLE
    dot = _LAST_STATUS_DOTS.get(last_status, "⚪")
    lines.append(
        f"{dot} Last: {last_status} {format_relative(job.state.last_run_at_ms, now_ms)}"
    )

    if job.enabled and _is_finite_number(job.state.next_run_at_ms):
        lines.append(f"⏭ Next: {format_relative(job.state.next_run_at_ms, now_ms)}")

    delivery = format_delivery(job.delivery)
    if delivery:
        lines.append(f"📨 {delivery}")

    if isinstance(payload, AgentTurnPayload) and payload.message:
        lines.append(f"💬 {payload_preview(payload.message)}")
    elif isinstance(payload, SystemEventPayload) and payload.text:
        lines.append(f"📝 {payload_preview(payload.text)}")

    return "\n".join(lines)


# -- Report -------------------------------------------------------------------


def assemble_report(blocks: Sequence[str]) -> str:
    """Header with the job count, then one block per job."""
    if not blocks:
        return NO_JOBS_TEXT
    header = f"{REPORT_ICON} *Cron Jobs ({len(blocks)})*"
    return header + "\n\n" + "\n\n".join(blocks)


def render_report(jobs: Sequence[CronJob], now_ms: float) -> str:
    """Render every job in source order and assemble the reply text."""
    return assemble_report(
        [render_job(job, i, now_ms) for i, job in enumerate(jobs, start=1)]
    )
