"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value.strip()

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def optional_env(name: str) -> str | None:
    """Return a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None:
        return None
    return value.strip() or None


def env_int(name: str, default: int) -> int:
    raw = optional_env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", setting=name) from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}", setting=name)
    return value


def env_float(name: str, default: float) -> float:
    raw = optional_env(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", setting=name) from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}", setting=name)
    return value


def env_list(name: str) -> tuple[str, ...]:
    """Split a comma or whitespace separated variable into lowercase items."""

    raw = optional_env(name)
    if raw is None:
        return ()
    items = (item.strip().lower() for item in raw.replace(",", " ").split())
    return tuple(item for item in items if item)
