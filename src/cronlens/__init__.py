"""cronlens: chat command that reports scheduled cron jobs."""

__version__ = "0.1.0"
