"""Text rendering for cron job reports."""

from cronlens.report.formatting import (
    JobStatus,
    assemble_report,
    classify_status,
    format_delivery,
    format_relative,
    format_schedule,
    payload_preview,
    render_job,
    render_report,
)

__all__ = [
    "JobStatus",
    "assemble_report",
    "classify_status",
    "format_delivery",
    "format_relative",
    "format_schedule",
    "payload_preview",
    "render_job",
    "render_report",
]
