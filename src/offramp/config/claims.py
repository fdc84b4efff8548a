"""Claim relay configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import ResilienceConfig

CLAIM_TIMEOUT_SECONDS = 90.0


@dataclass(frozen=True, slots=True)
class ClaimConfig:
    api_key: str
    resilience: ResilienceConfig


def get_claim_config(*, resilience: ResilienceConfig | None = None) -> ClaimConfig:
    values = require_env_vars(("CLAIM_API_URL", "CLAIM_API_KEY"))
    return ClaimConfig(
        api_key=values["CLAIM_API_KEY"],
        resilience=resilience
        or ResilienceConfig(
            name="claims",
            base_url=values["CLAIM_API_URL"],
            # claiming waits for the relayer to broadcast the transaction
            timeout_seconds=CLAIM_TIMEOUT_SECONDS,
            cache=None,
        ),
    )
