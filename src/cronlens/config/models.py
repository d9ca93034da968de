"""Pydantic models for configuration sub-sections."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from cronlens.config.constants import (
    DEFAULT_GATEWAY_TIMEOUT_SECONDS,
    DEFAULT_GATEWAY_URL,
    DEFAULT_HOST,
    DEFAULT_PORT,
)


class CommandsConfig(BaseModel):
    """Chat command settings."""

    text_enabled: bool = True  # False = ignore all text commands
    allowed_senders: list[str] = Field(default_factory=list)  # "*" = everyone


class CronConfig(BaseModel):
    """Where cron jobs are read from."""

    source: Literal["store", "gateway"] = "store"
    store: str = ""  # "" = ~/.cronlens/cron/jobs.json


class GatewayConfig(BaseModel):
    """Remote job registry reached through the gateway RPC endpoint."""

    url: str = DEFAULT_GATEWAY_URL
    token: str = Field(default="", exclude=True)
    timeout_seconds: float = Field(default=DEFAULT_GATEWAY_TIMEOUT_SECONDS, gt=0)


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


# Maps (nested_key_tuple) -> env_var_name for secret fields.
# Used by the env-loading logic in settings.py.
SECRET_FIELD_ENV_MAP: dict[tuple[str, ...], str] = {
    ("gateway", "token"): "CRONLENS_GATEWAY_TOKEN",
}
