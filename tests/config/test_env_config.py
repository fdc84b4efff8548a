from __future__ import annotations

import pytest

from offramp.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_claim_config,
    get_identity_config,
    get_routing_config,
    require_env_var,
    require_env_vars,
)
from offramp.config.env import float_env_var, optional_env_var


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)
    assert isinstance(exc.value, ConfigurationError)


def test_require_env_var_single(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ONE", "1")

    assert require_env_var("ONE") == "1"


def test_optional_and_float_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPTIONAL", raising=False)
    monkeypatch.setenv("NUMBER", "2.5")
    monkeypatch.setenv("NOT_NUMBER", "soon")

    assert optional_env_var("OPTIONAL") is None
    assert float_env_var("NUMBER", 1.0) == 2.5
    assert float_env_var("OPTIONAL", 1.0) == 1.0
    with pytest.raises(ConfigurationError, match="NOT_NUMBER"):
        float_env_var("NOT_NUMBER", 1.0)


def test_routing_config_adds_key_header_when_set(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROUTING_API_URL", "https://router.test/")
    monkeypatch.setenv("ROUTING_API_KEY", "route-key")

    config = get_routing_config()

    assert config.api_key == "route-key"
    assert config.resilience.default_headers == {"x-api-key": "route-key"}
    assert config.resilience.cache is not None
    assert config.resilience.cache.backend == "memory"


def test_post_is_never_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLAIM_API_URL", "https://claims.test/")
    monkeypatch.setenv("CLAIM_API_KEY", "claim-key")
    monkeypatch.setenv("IDENTITY_API_URL", "https://identity.test/")

    for config in (get_claim_config().resilience, get_identity_config().resilience):
        assert "POST" not in config.retry.allowed_methods
        assert config.cache is None
