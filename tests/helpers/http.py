"""Mock transports for exercising the HTTP adapters without a network."""

from __future__ import annotations

from collections.abc import Callable  # noqa: TC003

import httpx

from offramp.adapters.http_resilience import ResilienceConfig, ResilientClient


def make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            transport=httpx.MockTransport(async_handler),
            base_url=resilience.base_url or "",
        )
        return client

    return factory


def make_transport_factory(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    created: list[ResilientClient] | None = None,
) -> Callable[[ResilienceConfig], ResilientClient]:
    """Like ``make_client_factory`` but keeps the retry, rate limit and cache layers."""

    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience, transport=httpx.MockTransport(async_handler))
        if created is not None:
            created.append(client)
        return client

    return factory


class RecordingHandler:
    """Answers every request with the queued responses and remembers the requests."""

    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request {request.method} {request.url}")
        return self._responses.pop(0)
