"""Best-effort notification dispatch after a committed claim."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from listingclaim.domain.errors import NotificationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from listingclaim.domain.model import ClaimSubmitted
    from listingclaim.domain.ports import Notifier

log = logging.getLogger(__name__)


async def dispatch_notifications(notifiers: Iterable[Notifier], event: ClaimSubmitted) -> list[str]:
    """Send ``event`` through every channel and return the names that accepted it."""

    delivered: list[str] = []
    for notifier in notifiers:
        try:
            await notifier.send(event)
        except Exception as exc:
            error = NotificationError(f"{notifier.name} notification for claim {event.claim_id} failed")
            log.warning("%s: %s", error, exc, exc_info=exc)
            continue
        delivered.append(notifier.name)
    return delivered
