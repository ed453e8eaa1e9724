"""Service configuration.

Settings come from environment variables first, then from
``~/.firetruck/config.toml``, then built-in defaults::

    [service]
    url = "http://localhost:8080"
    timeout = 30
    max_concurrency = 16

    [target]
    url = "http://staging:8080"

The target service is only used as the destination of migrations and falls
back to the primary service.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import httpx
import toml  # type: ignore[import-untyped]

from .errors import ConfigError

SERVICE_ENV_VAR = "FT_SERVICE"
TARGET_SERVICE_ENV_VAR = "FT_SERVICE_TARGET"
TIMEOUT_ENV_VAR = "FT_TIMEOUT"
MAX_CONCURRENCY_ENV_VAR = "FT_MAX_CONCURRENCY"

DEFAULT_SERVICE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_CONCURRENCY = 16

CONFIG_DIR = Path.home() / ".firetruck"
CONFIG_PATH = CONFIG_DIR / "config.toml"


@dataclass(frozen=True)
class ServiceConfig:
    """Connection settings for one contract service."""

    base_url: str = DEFAULT_SERVICE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    transport: Optional[httpx.AsyncBaseTransport] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class CliState:
    """Source and migration-target services for one CLI invocation."""

    source: ServiceConfig
    target: ServiceConfig

    @classmethod
    def from_environment(cls, config_path: Path | None = None) -> "CliState":
        file_config = load_config_file(config_path or CONFIG_PATH)
        service_section = _section(file_config, "service")
        target_section = _section(file_config, "target")

        source = ServiceConfig(
            base_url=_first(os.getenv(SERVICE_ENV_VAR), service_section.get("url"), DEFAULT_SERVICE_URL),
            timeout=_parse_number(
                _first(os.getenv(TIMEOUT_ENV_VAR), service_section.get("timeout"), DEFAULT_TIMEOUT_SECONDS),
                float,
                "timeout",
            ),
            max_concurrency=_parse_number(
                _first(
                    os.getenv(MAX_CONCURRENCY_ENV_VAR),
                    service_section.get("max_concurrency"),
                    DEFAULT_MAX_CONCURRENCY,
                ),
                int,
                "max_concurrency",
            ),
        )
        target_url = _first(os.getenv(TARGET_SERVICE_ENV_VAR), target_section.get("url"), source.base_url)
        return cls(source=source, target=replace(source, base_url=target_url))


def load_config_file(path: Path) -> dict[str, Any]:
    """Read the TOML config file. A missing file yields an empty config."""
    if not path.exists():
        return {}
    try:
        return toml.load(path)
    except (toml.TomlDecodeError, OSError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section [{name}] must be a table")
    return section


def _first(*candidates: Any) -> Any:
    for candidate in candidates:
        if candidate is not None and candidate != "":
            return candidate
    return None


def _parse_number(raw: Any, kind: type, name: str) -> Any:
    try:
        value = kind(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value
