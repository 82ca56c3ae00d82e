"""Claim saga limits and defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int

DEFAULT_LOGO_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_HERO_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_DEADLINE_SECONDS = 30.0
IMAGE_MIME_PREFIX = "image/"


@dataclass(frozen=True, slots=True)
class ClaimConfig:
    logo_max_bytes: int = DEFAULT_LOGO_MAX_BYTES
    hero_max_bytes: int = DEFAULT_HERO_MAX_BYTES
    deadline_seconds: float = DEFAULT_DEADLINE_SECONDS
    mime_prefix: str = IMAGE_MIME_PREFIX


def get_claim_config() -> ClaimConfig:
    return ClaimConfig(
        logo_max_bytes=env_int("CLAIM_LOGO_MAX_BYTES", DEFAULT_LOGO_MAX_BYTES),
        hero_max_bytes=env_int("CLAIM_HERO_MAX_BYTES", DEFAULT_HERO_MAX_BYTES),
        deadline_seconds=env_float("CLAIM_DEADLINE_SECONDS", DEFAULT_DEADLINE_SECONDS),
    )
