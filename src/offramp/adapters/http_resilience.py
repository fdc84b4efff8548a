"""Rate-limited, retrying (and optionally caching) async HTTP client."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import (
    TYPE_CHECKING,
    TypedDict,
    Unpack,
)

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from offramp.config.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryablePayloadError,
    RetryPolicy,
    ShouldCacheHook,
)
from offramp.config.storage import get_storage_config

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import (
        AuthTypes,
        CookieTypes,
        HeaderTypes,
        QueryParamTypes,
        RequestContent,
        RequestData,
        RequestExtensions,
        RequestFiles,
        TimeoutTypes,
        URLTypes,
    )

    from offramp.config.http_resilience import ResponseHook

log = getLogger(__name__)

__all__ = [
    "CacheConfig",
    "RateLimit",
    "ResilienceConfig",
    "ClientSession",
    "ResilientClient",
    "RetryPolicy",
    "RetryablePayloadError",
    "build_retry",
]


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class RequestOptions(TypedDict, total=False):
    content: RequestContent | None
    data: RequestData | None
    files: RequestFiles | None
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    cookies: CookieTypes | None
    auth: AuthTypes | UseClientDefault | None
    follow_redirects: bool | UseClientDefault
    timeout: TimeoutTypes | UseClientDefault
    extensions: RequestExtensions | None


class AsyncClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    headers: HeaderTypes
    event_hooks: dict[str, list[ResponseHook]]
    transport: httpx.AsyncBaseTransport


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    log.debug("%s %s -> %s", request.method, request.url.path, response.status_code)


class ResilientClient:
    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )

        retry_transport = RetryTransport(transport=transport, retry=build_retry(config.retry))

        storage, policy = _build_cache_components(config.cache)

        headers = dict(config.default_headers) if config.default_headers else None
        event_hooks: dict[str, list[ResponseHook]] = {
            "response": [_log_response, *config.response_hooks]
        }

        client_kwargs: AsyncClientOptions = {
            "timeout": config.timeout_seconds,
            "transport": retry_transport,
            "event_hooks": event_hooks,
        }
        if config.base_url is not None:
            client_kwargs["base_url"] = config.base_url
        if headers is not None:
            client_kwargs["headers"] = headers

        if storage is not None:
            self._client = AsyncCacheClient(**client_kwargs, storage=storage, policy=policy)
        else:
            self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        async def do_request() -> httpx.Response:
            return await self._client.request(method, url, **kwargs)

        return await self._send(do_request)

    async def get(
        self,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(
        self,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def _send(self, func: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
        if self._limiter is None:
            return await func()
        async with self._limiter:
            return await func()


class ClientSession:
    """Keeps one event loop and one ``ResilientClient`` open across synchronous calls.

    The response cache, the rate limiter and the connection pool all live on the
    client, so they only take effect when consecutive requests share it. The
    client is created lazily inside the session's loop and kept until ``close``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None

    def run[T](
        self,
        operation: Callable[..., Awaitable[T]],
        *args: object,
    ) -> T:
        """Run ``operation(client, *args)`` to completion on the session loop."""
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(self._call(operation, *args))

    async def _call[T](self, operation: Callable[..., Awaitable[T]], *args: object) -> T:
        if self._client is None:
            log.debug("Opening %s HTTP session", self._config.name)
            self._client = self._client_factory(self._config)
        return await operation(self._client, *args)

    def close(self) -> None:
        runner, client = self._runner, self._client
        self._runner = None
        self._client = None
        if runner is None:
            return
        try:
            if client is not None:
                runner.run(client.aclose())
        finally:
            runner.close()


class _ShouldCacheResponseFilter(BaseFilter[HishelCacheResponse]):
    """Hishel response filter that delegates to a simple JSON predicate."""

    def __init__(self, predicate: ShouldCacheHook) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if body is None:
            return True
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return True
        return bool(self._predicate(payload))


def _build_cache_components(
    config: CacheConfig | None,
) -> tuple[AsyncSqliteStorage | None, FilterPolicy | None]:
    if config is None or not config.enabled:
        return None, None

    if config.backend not in {"sqlite", "memory"}:
        msg = f"Unsupported cache backend: {config.backend}"
        raise ValueError(msg)

    if config.backend == "sqlite":
        database_path = config.sqlite_path or str(get_storage_config().http_cache_path())
    else:
        database_path = ":memory:"
    storage = AsyncSqliteStorage(
        database_path=database_path,
        default_ttl=config.default_ttl_seconds,
        refresh_ttl_on_access=config.refresh_ttl_on_access,
    )

    policy: FilterPolicy | None = None
    if config.should_cache is not None:
        policy = FilterPolicy(response_filters=[_ShouldCacheResponseFilter(config.should_cache)])

    return storage, policy

