"""Shared logging helpers for the claim service."""

from __future__ import annotations

import logging

from .env import optional_env

SECURITY_LOGGER_NAME = "listingclaim.security"


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``LOG_LEVEL`` from the environment (INFO when unset). Pass
    ``force=True`` to reconfigure during tests or specialised entry points.
    """

    if level is None:
        level_name = (optional_env("LOG_LEVEL") or "INFO").upper()
        level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )


def security_logger() -> logging.Logger:
    """Logger for security events (tenant isolation violations)."""

    return logging.getLogger(SECURITY_LOGGER_NAME)
