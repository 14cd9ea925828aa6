"""Load opslevel-sync settings from an app-config YAML file and the environment.

The YAML file uses the backend app-config layout::

    backend:
      baseUrl: http://localhost:7007
    opslevel:
      frameworks: [rails, django, flask]

Environment variables override the file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from opslevel_sync.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_CONFIG_FILE = "OPSLEVEL_SYNC_CONFIG"
ENV_BASE_URL = "OPSLEVEL_SYNC_BASE_URL"
ENV_FRAMEWORKS = "OPSLEVEL_SYNC_FRAMEWORKS"
ENV_TIMEOUT = "OPSLEVEL_SYNC_TIMEOUT"

# An unset framework list matches nothing but the empty tag.
DEFAULT_FRAMEWORKS: tuple[str, ...] = ("",)
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True, slots=True)
class Settings:
    base_url: str
    frameworks: tuple[str, ...] = DEFAULT_FRAMEWORKS
    timeout: float = DEFAULT_TIMEOUT


def load_settings(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from an optional YAML file plus environment overrides.

    Args:
        path: App-config YAML file. Falls back to ``$OPSLEVEL_SYNC_CONFIG``.
        env: Environment mapping (defaults to ``os.environ``).

    Raises:
        ConfigError: If no base URL is configured or a value is malformed.
    """
    env = os.environ if env is None else env
    if path is None and env.get(ENV_CONFIG_FILE):
        path = env[ENV_CONFIG_FILE]

    data = _read_yaml(Path(path)) if path is not None else {}

    base_url = _get(data, "backend", "baseUrl")
    frameworks = _get(data, "opslevel", "frameworks")
    timeout: Any = _get(data, "opslevel", "timeout")

    if env.get(ENV_BASE_URL):
        base_url = env[ENV_BASE_URL]
    if env.get(ENV_FRAMEWORKS) is not None:
        frameworks = [f.strip() for f in env[ENV_FRAMEWORKS].split(",") if f.strip()]
    if env.get(ENV_TIMEOUT):
        timeout = env[ENV_TIMEOUT]

    if not isinstance(base_url, str) or not base_url:
        raise ConfigError(
            f"No backend base URL configured. Set 'backend.baseUrl' in the "
            f"config file or the {ENV_BASE_URL} environment variable."
        )

    return Settings(
        base_url=base_url.rstrip("/"),
        frameworks=_parse_frameworks(frameworks),
        timeout=_parse_timeout(timeout),
    )


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config file '{path}': {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config format in {path}: expected a YAML mapping.")
    logger.debug("Loaded settings from %s", path)
    return data


def _get(data: dict[str, Any], section: str, key: str) -> Any:
    block = data.get(section)
    return block.get(key) if isinstance(block, dict) else None


def _parse_frameworks(value: Any) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_FRAMEWORKS
    if not isinstance(value, list):
        raise ConfigError("'opslevel.frameworks' must be a list of strings.")
    return tuple(str(v) for v in value)


def _parse_timeout(value: Any) -> float:
    if value is None:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeout value: {value!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {timeout}.")
    return timeout
