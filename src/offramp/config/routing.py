"""Cross-chain routing service configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig

ROUTING_TIMEOUT_SECONDS = 30.0
OPTIONS_CACHE_TTL_SECONDS = 300.0


@dataclass(frozen=True, slots=True)
class RoutingConfig:
    api_key: str | None
    resilience: ResilienceConfig


def get_routing_config(*, resilience: ResilienceConfig | None = None) -> RoutingConfig:
    values = require_env_vars(("ROUTING_API_URL",))
    api_key = optional_env_var("ROUTING_API_KEY")
    headers = {"x-api-key": api_key} if api_key else None
    return RoutingConfig(
        api_key=api_key,
        resilience=resilience
        or ResilienceConfig(
            name="routing",
            base_url=values["ROUTING_API_URL"],
            timeout_seconds=ROUTING_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
            cache=CacheConfig(backend="memory", default_ttl_seconds=OPTIONS_CACHE_TTL_SECONDS),
            default_headers=headers,
        ),
    )
