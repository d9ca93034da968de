"""Types shared by chat command handlers."""

from __future__ import annotations

import re
from dataclasses import dataclass

_BOT_MENTION = re.compile(r"^(/[^\s@]+)@\S+")


@dataclass
class CommandContext:
    """Inbound command event, as handed over by the channel dispatcher."""

    command_body: str
    is_authorized_sender: bool
    sender_id: str | None = None
    channel: str = ""  # "http", "cli", "telegram", etc.

    @property
    def normalized(self) -> str:
        return normalize_command_body(self.command_body)


@dataclass
class ReplyPayload:
    """Text to deliver back to the sender."""

    text: str
    is_error: bool = False


@dataclass
class CommandResult:
    """Outcome of a handled command.

    ``reply`` is None when the command was handled silently (e.g. an
    unauthorized sender). ``should_continue`` tells the dispatcher whether
    other handlers may still look at the message.
    """

    should_continue: bool
    reply: ReplyPayload | None = None


def normalize_command_body(text: str) -> str:
    """Lowercase, trim, collapse whitespace and drop a ``@botname`` suffix.

    ``"  /CronJobs@MyBot  "`` becomes ``"/cronjobs"``.
    """
    body = " ".join(text.split()).lower()
    return _BOT_MENTION.sub(r"\1", body)


def is_sender_allowed(sender_id: str | None, allowed_senders: list[str]) -> bool:
    """Check a sender against the configured allow-list (``"*"`` = everyone)."""
    if "*" in allowed_senders:
        return True
    return bool(sender_id) and sender_id in allowed_senders
