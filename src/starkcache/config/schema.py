"""Pydantic model validating the merged runtime settings."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from starkcache.errors.exceptions import ConfigurationError


class Settings(BaseModel):
    model_config = {"extra": "allow"}

    catalog_path: str | None = None
    hash_function: str | None = None
    max_concurrency: int | None = Field(default=None, ge=1)
    collapse_disabled: bool = False
    log_level: str = "WARNING"

    @field_validator("max_concurrency", mode="before")
    @classmethod
    def _no_bool(cls, value: Any) -> Any:
        # bool would otherwise pass as 0/1
        if isinstance(value, bool):
            raise ValueError("expected an integer, got a boolean")
        return value

    @field_validator("catalog_path", mode="before")
    @classmethod
    def _path_to_str(cls, value: Any) -> Any:
        return str(value) if value is not None else None

    @field_validator("log_level", mode="before")
    @classmethod
    def _level_name(cls, value: Any) -> str:
        if isinstance(value, int) and not isinstance(value, bool):
            return logging.getLevelName(value)
        return str(value).upper()


def validate_settings(config: dict[str, Any]) -> dict[str, Any]:
    """Validate a merged config dict, raising ConfigurationError on the first bad key."""
    try:
        return Settings.model_validate(config).model_dump()
    except ValidationError as e:
        error = e.errors()[0]
        key = str(error["loc"][0]) if error["loc"] else None
        raise ConfigurationError(
            f"Invalid value for '{key}': {error['msg']} (got {error['input']!r})", key=key
        ) from e
