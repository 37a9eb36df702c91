"""Storefront settings.

Precedence, lowest first: field defaults, ``STOREFRONT_*`` environment
variables (``__`` separates section and key, e.g.
``STOREFRONT_NOTIFICATIONS__MAX_VISIBLE=3``), TOML file, explicit overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from .errors import ConfigError

DEFAULT_NOTIFICATION_DURATION_MS = 4000

LOG_FORMATS = ("json", "console")


class NotificationConfig(BaseModel):
    default_duration_ms: int = Field(default=DEFAULT_NOTIFICATION_DURATION_MS, gt=0)
    max_visible: int | None = Field(default=None, ge=1)  # None = unbounded


class BusConfig(BaseModel):
    log_handler_errors: bool = True


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "console"

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, v: str) -> str:
        if v not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}, got {v!r}")
        return v


class Settings(BaseSettings):
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    bus: BusConfig = Field(default_factory=BusConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "STOREFRONT_", "env_nested_delimiter": "__"}


def _merge_sections(base: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings from an optional TOML file plus overrides.

    A missing file is not an error; the defaults apply.  Overrides are
    merged per section, so ``{"observability": {"log_format": "json"}}``
    keeps the file's ``log_level``.

    Raises:
        ConfigError: the file exists but is not valid TOML.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.is_file():
            import tomli

            try:
                data = tomli.loads(path.read_text(encoding="utf-8"))
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if overrides:
        data = _merge_sections(data, overrides)

    return Settings(**data)
