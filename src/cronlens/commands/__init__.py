"""Chat command handlers."""

from cronlens.commands.base import (
    CommandContext,
    CommandResult,
    ReplyPayload,
    is_sender_allowed,
    normalize_command_body,
)
from cronlens.commands.cron import CronJobsCommand

__all__ = [
    "CommandContext",
    "CommandResult",
    "CronJobsCommand",
    "ReplyPayload",
    "is_sender_allowed",
    "normalize_command_body",
]
