"""The /cron (alias /cronjobs) chat command: list scheduled jobs."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from cronlens.commands.base import CommandContext, CommandResult, ReplyPayload
from cronlens.config.constants import CRON_COMMAND_ALIASES
from cronlens.report.formatting import render_report
from cronlens.scheduler.sources import JobSource

_default_logger = logging.getLogger("cronlens.commands.cron")


def _now_ms() -> float:
    return time.time() * 1000


class CronJobsCommand:
    """Reply to /cron with a snapshot of every configured job.

    The handler only knows one capability, ``source.list_jobs()``; whether
    jobs come from the local store or the gateway is decided by whoever
    builds the source. Nothing is cached: each invocation fetches afresh.
    """

    def __init__(
        self,
        source: JobSource,
        logger: logging.Logger | None = None,
        clock: Callable[[], float] = _now_ms,
    ) -> None:
        self._source = source
        self._logger = logger or _default_logger
        self._clock = clock

    def matches(self, context: CommandContext) -> bool:
        return context.normalized in CRON_COMMAND_ALIASES

    async def handle(
        self, context: CommandContext, allow_text_commands: bool = True
    ) -> CommandResult | None:
        """Return None when the message is not ours, else a result to act on."""
        if not allow_text_commands:
            return None
        if not self.matches(context):
            return None

        if not context.is_authorized_sender:
            self._logger.debug(
                "Ignoring /cronjobs from unauthorized sender: %s",
                context.sender_id or "<unknown>",
            )
            return CommandResult(should_continue=False)

        try:
            jobs = await self._source.list_jobs(include_disabled=True)
        except Exception as exc:
            detail = _short_description(exc)
            self._logger.warning("Failed to load cron jobs: %s", detail)
            return _error_result(f"❌ Failed to load cron jobs: {detail}")

        try:
            text = render_report(jobs, self._clock())
        except Exception as exc:
            self._logger.exception("Failed to render %d cron jobs", len(jobs))
            return _error_result(f"❌ Failed to render cron jobs: {_short_description(exc)}")

        self._logger.debug("Listed %d cron jobs for %s", len(jobs), context.sender_id)
        return CommandResult(should_continue=False, reply=ReplyPayload(text=text))


def _short_description(exc: Exception) -> str:
    """First line of the error message, or the exception type when empty."""
    lines = str(exc).strip().splitlines()
    return lines[0] if lines else type(exc).__name__


def _error_result(text: str) -> CommandResult:
    return CommandResult(
        should_continue=False, reply=ReplyPayload(text=text, is_error=True)
    )
