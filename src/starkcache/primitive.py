"""Hash primitive resolution: load the external Pedersen hash by import path."""

from __future__ import annotations

import asyncio
import functools
import importlib
import inspect
import logging
from collections.abc import Awaitable, Callable

from starkcache.errors.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

AsyncHashPrimitive = Callable[[int, int], Awaitable[int]]


def resolve_primitive(path: str | None) -> AsyncHashPrimitive:
    """Import a hash function given as ``"package.module:attribute"``.

    Sync callables are wrapped with :func:`as_async`.
    """
    if not path:
        raise ConfigurationError("No hash function configured", key="hash_function")

    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError(
            f"Hash function must look like 'package.module:function', got '{path}'",
            key="hash_function",
        )

    try:
        target: object = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"Cannot import module '{module_name}': {e}", key="hash_function"
        ) from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ConfigurationError(
                f"'{module_name}' has no attribute '{attr_path}'", key="hash_function"
            ) from e

    if not callable(target):
        raise ConfigurationError(f"'{path}' is not callable", key="hash_function")

    logger.debug("Resolved hash function %s", path)
    return as_async(target)


def as_async(fn: Callable[[int, int], object]) -> AsyncHashPrimitive:
    """Return an async primitive; sync functions run in a worker thread."""
    if _is_async_callable(fn):
        return fn  # type: ignore[return-value]

    @functools.wraps(fn)
    async def wrapper(left: int, right: int) -> int:
        return await asyncio.to_thread(fn, left, right)  # type: ignore[arg-type]

    return wrapper


def _is_async_callable(fn: object) -> bool:
    if inspect.iscoroutinefunction(fn):
        return True
    call = getattr(fn, "__call__", None)
    return inspect.iscoroutinefunction(call)
