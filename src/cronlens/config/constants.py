"""Paths and default values used across the project."""

from pathlib import Path

# Base directory for all cronlens data
CRONLENS_HOME = Path.home() / ".cronlens"

CONFIG_DIR = CRONLENS_HOME
CONFIG_FILE = CONFIG_DIR / "config.json"
ENV_FILE = CRONLENS_HOME / ".env"
CRON_DIR = CRONLENS_HOME / "cron"
CRON_FILE = CRON_DIR / "jobs.json"

# Job sources
SOURCE_STORE = "store"
SOURCE_GATEWAY = "gateway"

# Gateway defaults
DEFAULT_GATEWAY_URL = "http://127.0.0.1:18789"
DEFAULT_GATEWAY_TIMEOUT_SECONDS = 10.0

# Server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8090

# Chat command tokens (already normalized)
CRON_COMMAND_ALIASES: frozenset[str] = frozenset({"/cron", "/cronjobs"})
