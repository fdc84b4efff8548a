"""Settlement workflow defaults."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Literal, cast

from .env import float_env_var, optional_env_var
from .errors import ConfigurationError

DEFAULT_STALE_AFTER = timedelta(minutes=10)

RecoveryBackend = Literal["sqlite", "file"]
_RECOVERY_BACKENDS: frozenset[str] = frozenset({"sqlite", "file"})


@dataclass(frozen=True, slots=True)
class SettlementConfig:
    stale_after: timedelta = DEFAULT_STALE_AFTER
    recovery_backend: RecoveryBackend = "sqlite"


def get_settlement_config() -> SettlementConfig:
    stale_seconds = float_env_var(
        "OFFRAMP_STALE_AFTER_SECONDS", DEFAULT_STALE_AFTER.total_seconds()
    )
    if stale_seconds < 0:
        raise ConfigurationError("OFFRAMP_STALE_AFTER_SECONDS must be non-negative")
    backend = optional_env_var("OFFRAMP_RECOVERY_BACKEND") or "sqlite"
    if backend not in _RECOVERY_BACKENDS:
        raise ConfigurationError(f"Unsupported recovery backend: {backend}")
    return SettlementConfig(
        stale_after=timedelta(seconds=stale_seconds),
        recovery_backend=cast("RecoveryBackend", backend),
    )
