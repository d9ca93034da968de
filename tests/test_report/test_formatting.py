"""Tests for schedule/time formatting, status classification, and job rendering."""

from __future__ import annotations

import math

import pytest

from cronlens.report.formatting import (
    NO_JOBS_TEXT,
    JobStatus,
    assemble_report,
    classify_status,
    format_delivery,
    format_interval,
    format_relative,
    format_schedule,
    payload_preview,
    render_job,
    render_report,
)
from cronlens.scheduler.models import (
    AtSchedule,
    CronJob,
    CronSchedule,
    Delivery,
    EverySchedule,
    UnknownSchedule,
)

NOW = 1_760_000_000_000.0


def _job(**fields) -> CronJob:
    return CronJob.model_validate({"id": "j1", "name": "Job", **fields})


# ---------------------------------------------------------------------------
# Schedule formatter
# ---------------------------------------------------------------------------


class TestFormatSchedule:
    def test_at(self):
        assert format_schedule(AtSchedule(at="2026-03-01T09:00:00Z")) == "at 2026-03-01T09:00:00Z"

    def test_at_epoch_value_is_shown_raw(self):
        assert format_schedule(AtSchedule(at=1_767_225_600_000)) == "at 1767225600000"

    def test_at_missing_value(self):
        assert format_schedule(AtSchedule()) == "at ?"

    @pytest.mark.parametrize(
        ("every_ms", "expected"),
        [
            (0, "every 0ms"),
            (500, "every 500ms"),
            (1_000, "every 1s"),
            (59_000, "every 59s"),
            (59_999, "every 59s"),
            (60_000, "every 1m"),
            (90_000, "every 1m"),
            (3_599_999, "every 59m"),
            (3_600_000, "every 1h"),
            (5_400_000, "every 1.5h"),
            (86_399_999, "every 23.9h"),
            (86_400_000, "every 1d"),
            (129_600_000, "every 1.5d"),
            (864_000_000, "every 10d"),
        ],
    )
    def test_every_unit_table(self, every_ms, expected):
        assert format_schedule(EverySchedule(every_ms=every_ms)) == expected

    def test_negative_interval_clamps_to_zero(self):
        assert format_interval(-5) == "0ms"

    def test_cron_with_timezone(self):
        schedule = CronSchedule(expr="0 9 * * 1-5", tz="Europe/Berlin")
        assert format_schedule(schedule) == "cron: 0 9 * * 1-5 (Europe/Berlin)"

    def test_cron_without_timezone(self):
        assert format_schedule(CronSchedule(expr="*/30 * * * *")) == "cron: */30 * * * *"

    def test_unknown_kind_shows_kind(self):
        assert format_schedule(UnknownSchedule(kind="weekly")) == "weekly"

    def test_garbage_degrades_to_default_label(self):
        assert format_schedule(None) == "unknown"
        assert format_schedule("*/5 * * * *") == "unknown"


# ---------------------------------------------------------------------------
# Relative time formatter
# ---------------------------------------------------------------------------


class TestFormatRelative:
    @pytest.mark.parametrize("value", [None, math.nan, math.inf, -math.inf, "soon", True])
    def test_unknown_is_not_available(self, value):
        assert format_relative(value, NOW) == "n/a"

    def test_zero_distance(self):
        assert format_relative(NOW, NOW) == "in 0s"

    @pytest.mark.parametrize(
        ("offset_ms", "expected"),
        [
            (30_000, "in 30s"),
            (1_800_000, "in 30m"),
            (-5_400_000, "1.5h ago"),
            (-3_600_000, "1.0h ago"),
            (2 * 86_400_000, "in 2.0d"),
            (-59_999, "59s ago"),
        ],
    )
    def test_labels(self, offset_ms, expected):
        assert format_relative(NOW + offset_ms, NOW) == expected

    @pytest.mark.parametrize("value", [1.7e308, -1.7e308])
    def test_extreme_timestamps_do_not_raise(self, value):
        label = format_relative(value, NOW)
        assert label.startswith("in ") or label.endswith(" ago")
        assert "d" in label

    def test_int_too_large_for_float(self):
        assert format_relative(10**400, NOW) == "n/a"

    def test_huge_interval(self):
        assert format_interval(10**20).endswith("d")

    @pytest.mark.parametrize("d", [1, 999, 45_000, 600_000, 7_200_000, 90_000_000, 1_000_000_000])
    def test_anti_symmetric(self, d):
        future = format_relative(NOW + d, NOW)
        past = format_relative(NOW - d, NOW)
        assert future.startswith("in ")
        assert past.endswith(" ago")
        assert future.removeprefix("in ") == past.removesuffix(" ago")


# ---------------------------------------------------------------------------
# Status classifier
# ---------------------------------------------------------------------------


class TestClassifyStatus:
    @pytest.mark.parametrize(
        "state",
        [
            {},
            {"runningAtMs": NOW},
            {"lastStatus": "ok"},
            {"lastStatus": "error", "runningAtMs": NOW},
            {"lastStatus": "skipped"},
        ],
    )
    def test_disabled_wins_over_everything(self, state):
        assert classify_status(_job(enabled=False, state=state)) is JobStatus.DISABLED

    @pytest.mark.parametrize("last", ["ok", "error", "skipped", None])
    def test_running_beats_last_status(self, last):
        job = _job(state={"runningAtMs": NOW - 1_000, "lastStatus": last})
        assert classify_status(job) is JobStatus.RUNNING

    @pytest.mark.parametrize(
        ("last", "expected"),
        [
            ("ok", JobStatus.OK),
            ("error", JobStatus.ERROR),
            ("skipped", JobStatus.SKIPPED),
            (None, JobStatus.IDLE),
        ],
    )
    def test_last_status(self, last, expected):
        assert classify_status(_job(state={"lastStatus": last})) is expected

    def test_icons_and_labels_are_unique(self):
        assert len({s.icon for s in JobStatus}) == len(JobStatus)
        assert [s.label for s in JobStatus] == [
            "disabled", "running", "ok", "error", "skipped", "idle",
        ]


# ---------------------------------------------------------------------------
# Delivery and preview
# ---------------------------------------------------------------------------


class TestFormatDelivery:
    def test_none(self):
        assert format_delivery(None) == ""
        assert format_delivery(Delivery(mode="none", channel="telegram")) == ""

    def test_full_target(self):
        delivery = Delivery(mode="announce", channel="telegram", to="12345")
        assert format_delivery(delivery) == "announce: telegram → 12345"

    def test_partial_target(self):
        assert format_delivery(Delivery(mode="announce", channel="slack")) == "announce: slack"

    def test_mode_only(self):
        assert format_delivery(Delivery(mode="announce")) == "announce"


class TestPayloadPreview:
    def test_short_text_unchanged(self):
        assert payload_preview("Run nightly backup") == "Run nightly backup"

    def test_newlines_collapsed(self):
        assert payload_preview("line one\nline two\r\nline three") == "line one line two line three"

    def test_exactly_80_has_no_ellipsis(self):
        text = "x" * 80
        assert payload_preview(text) == text

    def test_long_text_truncated(self):
        preview = payload_preview("word " * 50)
        assert len(preview) == 81
        assert preview.endswith("…")

    def test_never_contains_newline(self):
        preview = payload_preview("a\n" * 100)
        assert "\n" not in preview
        assert len(preview) <= 81


# ---------------------------------------------------------------------------
# Job renderer
# ---------------------------------------------------------------------------


class TestRenderJob:
    def test_backup_example(self):
        job = _job(
            name="Backup",
            schedule={"kind": "every", "everyMs": 3_600_000},
            payload={"kind": "systemEvent", "text": "Run nightly backup"},
            state={
                "lastStatus": "ok",
                "lastRunAtMs": NOW - 5_400_000,
                "nextRunAtMs": NOW + 1_800_000,
            },
        )
        assert render_job(job, 1, NOW) == (
            "✅ *1. Backup*\n"
            "📅 every 1h\n"
            "🟢 Last: ok 1.5h ago\n"
            "⏭ Next: in 30m\n"
            "📝 Run nightly backup"
        )

    def test_optional_lines(self):
        job = _job(
            name="Briefing",
            authProfile="work-google",
            schedule={"kind": "cron", "expr": "0 7 * * *", "tz": "UTC"},
            payload={"kind": "agentTurn", "message": "Prepare my briefing", "model": "opus"},
            delivery={"mode": "announce", "channel": "telegram", "to": "42"},
            state={"lastStatus": "error", "lastRunAtMs": NOW - 60_000},
        )
        lines = render_job(job, 3, NOW).splitlines()
        assert lines == [
            "❌ *3. Briefing*",
            "📅 cron: 0 7 * * * (UTC)",
            "🔑 Auth: work-google",
            "🤖 Model: opus",
            "🔴 Last: error 1m ago",
            "📨 announce: telegram → 42",
            "💬 Prepare my briefing",
        ]

    def test_never_run_job_shows_not_available(self):
        lines = render_job(_job(), 1, NOW).splitlines()
        assert "⚪ Last: n/a n/a" in lines

    def test_disabled_job_hides_next_run(self):
        job = _job(enabled=False, state={"nextRunAtMs": NOW + 60_000})
        text = render_job(job, 1, NOW)
        assert text.startswith("⏸ *1. Job*")
        assert "Next:" not in text

    def test_nan_next_run_hides_next_line(self):
        job = _job(state={"lastStatus": "ok", "nextRunAtMs": math.nan})
        assert "Next:" not in render_job(job, 1, NOW)

    def test_huge_last_run_renders(self):
        job = _job(state={"lastStatus": "ok", "lastRunAtMs": 1.7e308})
        lines = render_job(job, 1, NOW).splitlines()
        assert lines[2].startswith("🟢 Last: ok in ")
        assert lines[2].endswith("d")

    def test_unknown_payload_has_no_preview(self):
        job = _job(payload={"kind": "webhook", "url": "https://example.com"})
        text = render_job(job, 1, NOW)
        assert "💬" not in text
        assert "📝" not in text

    def test_model_line_needs_agent_turn(self):
        job = _job(payload={"kind": "systemEvent", "text": "ping", "model": "opus"})
        assert "Model:" not in render_job(job, 1, NOW)

    def test_name_falls_back_to_id(self):
        job = CronJob.model_validate({"id": "abc123"})
        assert render_job(job, 1, NOW).splitlines()[0] == "⬜ *1. abc123*"


# ---------------------------------------------------------------------------
# Report assembler
# ---------------------------------------------------------------------------


class TestAssembleReport:
    def test_empty_is_no_jobs_message(self):
        assert assemble_report([]) == NO_JOBS_TEXT
        assert render_report([], NOW) == "🕐 No cron jobs configured."

    def test_header_and_blank_line_separators(self):
        text = assemble_report(["block one", "block two"])
        assert text == "🕐 *Cron Jobs (2)*\n\nblock one\n\nblock two"

    def test_numbering_follows_source_order(self):
        jobs = [_job(id=f"j{i}", name=name) for i, name in enumerate(["Zeta", "Alpha", "Mid"])]
        text = render_report(jobs, NOW)
        assert text.index("*1. Zeta*") < text.index("*2. Alpha*") < text.index("*3. Mid*")
        assert text.startswith("🕐 *Cron Jobs (3)*\n\n")
