"""Application configuration helpers."""

from __future__ import annotations

from .banking import BankingConfig, get_banking_config
from .claims import ClaimConfig, get_claim_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .identity import IdentityConfig, get_identity_config
from .logging import configure_logging
from .routing import RoutingConfig, get_routing_config
from .settlement import SettlementConfig, get_settlement_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "BankingConfig",
    "CacheConfig",
    "ClaimConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "IdentityConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "RoutingConfig",
    "SettlementConfig",
    "StorageConfig",
    "configure_logging",
    "get_banking_config",
    "get_claim_config",
    "get_database_config",
    "get_identity_config",
    "get_routing_config",
    "get_settlement_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
