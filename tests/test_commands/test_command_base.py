"""Tests for command parsing helpers and the sender allow-list."""

from __future__ import annotations

import pytest

from cronlens.commands.base import CommandContext, is_sender_allowed, normalize_command_body


class TestNormalizeCommandBody:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("/cron", "/cron"),
            ("  /CRON  ", "/cron"),
            ("/CronJobs@MyBot", "/cronjobs"),
            ("/cron   list", "/cron list"),
            ("hello there", "hello there"),
            ("", ""),
        ],
    )
    def test_normalization(self, raw, expected):
        assert normalize_command_body(raw) == expected

    def test_mention_only_stripped_from_command_word(self):
        assert normalize_command_body("/cron@bot extra@word") == "/cron extra@word"

    def test_context_exposes_normalized(self):
        ctx = CommandContext(command_body=" /Cron@Bot ", is_authorized_sender=True)
        assert ctx.normalized == "/cron"


class TestIsSenderAllowed:
    def test_listed_sender(self):
        assert is_sender_allowed("alice", ["alice", "bob"]) is True

    def test_unlisted_sender(self):
        assert is_sender_allowed("mallory", ["alice"]) is False

    def test_wildcard(self):
        assert is_sender_allowed("anyone", ["*"]) is True
        assert is_sender_allowed(None, ["*"]) is True

    def test_empty_list_denies(self):
        assert is_sender_allowed("alice", []) is False

    def test_missing_sender(self):
        assert is_sender_allowed(None, ["alice"]) is False
        assert is_sender_allowed("", ["alice"]) is False
