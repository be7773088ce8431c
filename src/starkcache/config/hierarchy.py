"""Configuration hierarchy: merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.starkcache/config.yaml)
  3. Project config   (nearest ./starkcache.yaml, searching upward)
  4. Environment variables (STARKCACHE_*)
  5. Runtime arguments

The merged result is validated by ``Settings``, so env strings such as
``"8"`` or ``"true"`` arrive typed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from starkcache.config.defaults import get_defaults
from starkcache.config.schema import validate_settings

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".starkcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "starkcache.yaml"

_ENV_MAP: dict[str, str] = {
    "STARKCACHE_CATALOG": "catalog_path",
    "STARKCACHE_HASH_FUNCTION": "hash_function",
    "STARKCACHE_MAX_CONCURRENCY": "max_concurrency",
    "STARKCACHE_COLLAPSE_DISABLED": "collapse_disabled",
    "STARKCACHE_LOG_LEVEL": "log_level",
}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load, merge and validate configuration from all sources.

    Raises ConfigurationError when a merged value has the wrong type.
    """
    config = get_defaults()
    project_path = _find_project_config()
    layers = [
        _load_yaml_config(_GLOBAL_CONFIG_PATH),
        _load_yaml_config(project_path) if project_path else None,
        {key: os.environ[env] for env, key in _ENV_MAP.items() if env in os.environ},
        {key: value for key, value in runtime_overrides.items() if value is not None},
    ]
    for layer in layers:
        if layer:
            config.update(layer)
    return validate_settings(config)


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring", path)
        return None
    return data


def _find_project_config() -> Path | None:
    cwd = Path.cwd()
    return next(
        (p / _PROJECT_CONFIG_NAME for p in [cwd, *cwd.parents] if (p / _PROJECT_CONFIG_NAME).is_file()),
        None,
    )
