"""Notification channels: transactional email and the operator webhook."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar

import httpx

from listingclaim.adapters.http_resilience import ResilientClient
from listingclaim.domain.ports import NotificationDeliveryError

from .messages import claimant_html, claimant_subject, claimant_text, operator_text

if TYPE_CHECKING:
    from collections.abc import Callable

    from listingclaim.config.http_resilience import ResilienceConfig
    from listingclaim.config.notifications import NotificationConfig
    from listingclaim.domain.model import ClaimSubmitted
    from listingclaim.domain.ports import Notifier

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


async def _post_json(
    client_factory: Callable[[ResilienceConfig], ResilientClient],
    resilience: ResilienceConfig,
    url: str,
    payload: dict[str, object],
    *,
    headers: dict[str, str] | None = None,
) -> None:
    try:
        async with client_factory(resilience) as client:
            response = await client.post(url, json=payload, headers=headers)
    except httpx.HTTPError as exc:
        raise NotificationDeliveryError(f"{url} unreachable: {exc}") from exc
    if not response.is_success:
        raise NotificationDeliveryError(f"{url} answered HTTP {response.status_code}: {response.text}")


@dataclass(slots=True)
class EmailNotifier:
    """Claimant confirmation through a Resend-compatible email API.

    The sender and API key are chosen per event tenant, falling back to the
    global email settings.
    """

    name: ClassVar[str] = "email"

    config: NotificationConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    async def send(self, event: ClaimSubmitted) -> None:
        email = self.config.email_for(event.tenant)
        if email is None:
            raise NotificationDeliveryError(f"no email sender configured for tenant {event.tenant!r}")
        payload: dict[str, object] = {
            "from": f"{email.from_name} <{email.from_email}>",
            "to": [event.claimant_email],
            "subject": claimant_subject(event),
            "html": claimant_html(event),
            "text": claimant_text(event),
        }
        await _post_json(
            self.client_factory,
            self.config.resilience,
            email.api_url,
            payload,
            headers={"Authorization": f"Bearer {email.api_key}"},
        )
        log.info("Sent claim confirmation for %s to %s", event.claim_id, event.claimant_email)


@dataclass(slots=True)
class OperatorWebhookNotifier:
    """Operator alert posted to the tenant's Slack-compatible incoming webhook."""

    name: ClassVar[str] = "operator"

    config: NotificationConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    async def send(self, event: ClaimSubmitted) -> None:
        operator = self.config.operator_for(event.tenant)
        if operator is None:
            raise NotificationDeliveryError(f"no operator webhook configured for tenant {event.tenant!r}")
        text = operator_text(event, review_url=operator.review_url)
        await _post_json(self.client_factory, self.config.resilience, operator.webhook_url, {"text": text})
        log.info("Alerted %s operators about claim %s", event.tenant, event.claim_id)


def build_notifiers(
    config: NotificationConfig,
    *,
    client_factory: Callable[[ResilienceConfig], ResilientClient] = _default_client_factory,
) -> list[Notifier]:
    """Instantiate every channel configured globally or for some tenant."""

    notifiers: list[Notifier] = []
    if config.has_email:
        notifiers.append(EmailNotifier(config, client_factory))
    else:
        log.info("Email notifications disabled (no API key or sender configured)")
    if config.has_operator:
        notifiers.append(OperatorWebhookNotifier(config, client_factory))
    else:
        log.info("Operator notifications disabled (no webhook configured)")
    if config.tenants:
        log.info("Tenant notification overrides: %s", ", ".join(sorted(config.tenants)))
    return notifiers
