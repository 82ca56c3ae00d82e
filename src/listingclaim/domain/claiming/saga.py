"""Compensation stack for the provisioning saga."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from uuid import UUID

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Compensation:
    name: str
    action: Callable[[], Awaitable[object]]


class CompensationStack:
    """Reversing actions for completed saga steps, undone last-in first-out.

    Once ``seal`` is called the saga has committed and ``unwind`` does nothing.
    A failing compensation is logged for manual reconciliation and the remaining
    ones still run; nothing is retried and nothing is raised.
    """

    def __init__(self, *, listing_id: UUID, claimant_email: str) -> None:
        self.listing_id = listing_id
        self.claimant_email = claimant_email
        self._pending: list[Compensation] = []
        self._sealed = False

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def push(self, name: str, action: Callable[[], Awaitable[object]]) -> None:
        if self._sealed:
            raise RuntimeError("Cannot register a compensation after the saga committed")
        self._pending.append(Compensation(name, action))

    def seal(self) -> None:
        self._sealed = True
        self._pending.clear()

    async def unwind(self) -> list[str]:
        """Run every pending compensation in reverse order; return the names that failed."""

        failed: list[str] = []
        while self._pending:
            step = self._pending.pop()
            try:
                await step.action()
            except Exception:
                log.exception(
                    "Compensation %r failed for listing %s (claimant %s); "
                    "manual reconciliation required",
                    step.name,
                    self.listing_id,
                    self.claimant_email,
                )
                failed.append(step.name)
            else:
                log.info("Compensated %r for listing %s", step.name, self.listing_id)
        return failed
