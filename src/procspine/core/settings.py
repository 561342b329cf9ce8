"""Process Spine settings.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.
    The record core itself has nothing to tune; what a deployment sets is
    how its logs look and which service name they carry.

Features:
    - **ProcSpineSettings:** service_name, log_level, log_json
    - **env_prefix:** ``PROCSPINE_`` environment variables
    - **.env file support:** Automatic loading via pydantic-settings
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> from procspine.core.settings import ProcSpineSettings
    >>> from procspine.core.logging import configure_from_settings
    >>> configure_from_settings(ProcSpineSettings())

Tags:
    settings, configuration, pydantic, environment, procspine
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from procspine.core.errors import InvalidConfigError
from procspine.core.logging import resolve_level


class ProcSpineSettings(BaseSettings):
    """Settings for a process running procspine record pipelines.

    Fields
    ──────
    service_name : ``service.name`` stamped on every log line
    log_level    : Structlog log level
    log_json     : JSON logs (True), console logs (False), auto-detect (None)
    """

    model_config = SettingsConfigDict(
        env_prefix="PROCSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = "procspine"
    log_level: str = "INFO"
    log_json: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        try:
            resolve_level(value)
        except InvalidConfigError as exc:
            raise ValueError(exc.message) from exc
        return value.upper()
