"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Catalog and hash function are deployment-specific, no package default
DEFAULT_CATALOG_PATH = None
DEFAULT_HASH_FUNCTION = None

# Default cache settings
DEFAULT_MAX_CONCURRENCY = None  # unbounded
DEFAULT_COLLAPSE_DISABLED = False

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "catalog_path": DEFAULT_CATALOG_PATH,
        "hash_function": DEFAULT_HASH_FUNCTION,
        "max_concurrency": DEFAULT_MAX_CONCURRENCY,
        "collapse_disabled": DEFAULT_COLLAPSE_DISABLED,
        "log_level": DEFAULT_LOG_LEVEL,
    }
