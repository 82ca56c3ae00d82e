"""``httpx.MockTransport`` plumbing for adapter tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from listingclaim.adapters.http_resilience import ResilientClient
from listingclaim.config.http_resilience import ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Callable

    from listingclaim.config.http_resilience import RateLimit

NO_RETRY = RetryPolicy(total=0)


def resilience(
    name: str = "test",
    *,
    base_url: str | None = None,
    retry: RetryPolicy = NO_RETRY,
    ratelimit: RateLimit | None = None,
    headers: dict[str, str] | None = None,
) -> ResilienceConfig:
    return ResilienceConfig(
        name=name,
        base_url=base_url,
        timeout_seconds=2.0,
        retry=retry,
        ratelimit=ratelimit,
        default_headers=headers,
    )


@dataclass(slots=True)
class RecordingTransport:
    """Answers every request with ``handler`` and keeps the requests it saw."""

    handler: Callable[[httpx.Request], httpx.Response]
    requests: list[httpx.Request] = field(default_factory=list)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.handler(request)

    def client_factory(self, config: ResilienceConfig) -> ResilientClient:
        return ResilientClient(config, transport=httpx.MockTransport(self._handle))


def respond(status_code: int = 200, **kwargs: object) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(status_code, **kwargs)  # type: ignore[arg-type]

    return handler


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)
