"""Identity service configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import ResilienceConfig


@dataclass(frozen=True, slots=True)
class IdentityConfig:
    resilience: ResilienceConfig


def get_identity_config(*, resilience: ResilienceConfig | None = None) -> IdentityConfig:
    values = require_env_vars(("IDENTITY_API_URL",))
    return IdentityConfig(
        resilience=resilience
        or ResilienceConfig(name="identity", base_url=values["IDENTITY_API_URL"], cache=None)
    )
