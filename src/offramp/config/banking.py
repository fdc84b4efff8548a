"""Banking partner configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

BANKING_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True, slots=True)
class BankingConfig:
    """Holds banking partner API configuration values."""

    api_key: str
    resilience: ResilienceConfig


def get_banking_config(*, resilience: ResilienceConfig | None = None) -> BankingConfig:
    values = require_env_vars(("BANKING_API_URL", "BANKING_API_KEY"))
    return BankingConfig(
        api_key=values["BANKING_API_KEY"],
        resilience=resilience
        or ResilienceConfig(
            name="banking",
            base_url=values["BANKING_API_URL"],
            timeout_seconds=BANKING_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            # liquidation address listings must always be fresh
            cache=None,
        ),
    )
