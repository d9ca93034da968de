"""Central settings: loads from ~/.cronlens/config.json + environment variables."""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cronlens.config.constants import CONFIG_FILE, ENV_FILE
from cronlens.config.models import (
    SECRET_FIELD_ENV_MAP,
    CommandsConfig,
    CronConfig,
    GatewayConfig,
    ServerConfig,
)

logger = logging.getLogger("cronlens.config.settings")


class Settings(BaseSettings):
    """All cronlens configuration in one place.

    Priority (highest → lowest):
      1. Environment variables (CRONLENS_ prefix, ``__`` for nesting)
      2. .env file
      3. ~/.cronlens/config.json
      4. Defaults defined here
    """

    model_config = SettingsConfigDict(
        env_prefix="CRONLENS_",
        env_nested_delimiter="__",
        env_file=(".env", str(ENV_FILE)),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Sub-configs ---
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    cron: CronConfig = Field(default_factory=CronConfig)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values: dict) -> dict:
        """Merge config.json values as defaults (env vars still override)."""
        if CONFIG_FILE.exists():
            try:
                file_data = json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
                # File values are the base; explicit values override
                merged = {**file_data, **{k: v for k, v in values.items() if v is not None}}
                values = merged
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Ignoring unreadable config file %s: %s", CONFIG_FILE, exc)

        # Populate secret fields from env vars / .env
        cls._apply_env_to_secrets(values)
        return values

    @classmethod
    def _apply_env_to_secrets(cls, values: dict) -> None:
        """Fill empty secret fields from environment variables and the .env file."""
        from cronlens.config.env_utils import read_env_file

        env_file_vals = read_env_file()

        for key_path, env_var in SECRET_FIELD_ENV_MAP.items():
            val = os.environ.get(env_var) or env_file_vals.get(env_var)
            if not val:
                continue

            # Walk into the nested values dict, creating sub-dicts as needed
            node = values
            for part in key_path[:-1]:
                child = node.get(part)
                if isinstance(child, BaseModel):
                    if getattr(child, key_path[-1], ""):
                        break
                    child = {**child.model_dump(), key_path[-1]: ""}
                elif not isinstance(child, dict):
                    child = {}
                node[part] = child
                node = child
            else:
                if not node.get(key_path[-1]):
                    node[key_path[-1]] = val

    @property
    def job_source(self) -> str:
        """Configured job source name ("store" or "gateway")."""
        return self.cron.source

    @classmethod
    def config_exists(cls) -> bool:
        return CONFIG_FILE.exists()


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
