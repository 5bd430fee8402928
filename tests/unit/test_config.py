"""Tests for pool and service configuration."""

from decimal import Decimal

import pytest

from radiswap.config import DEFAULT_POOL_CONFIG, PoolConfig, ServiceSettings


class TestPoolConfig:
    def test_defaults(self):
        assert DEFAULT_POOL_CONFIG.initial_pool_units == Decimal(100)
        assert DEFAULT_POOL_CONFIG.amount_divisibility == 18
        assert DEFAULT_POOL_CONFIG.reject_zero_swaps is True
        assert DEFAULT_POOL_CONFIG.reject_zero_redemptions is True

    def test_frozen(self):
        with pytest.raises(AttributeError):
            PoolConfig().initial_pool_units = Decimal(1)  # type: ignore[misc]


class TestServiceSettings:
    def test_defaults(self, monkeypatch):
        for name in ("RADISWAP_HOST", "RADISWAP_PORT", "RADISWAP_DEBUG"):
            monkeypatch.delenv(name, raising=False)
        settings = ServiceSettings.from_env()
        assert settings == ServiceSettings(host="0.0.0.0", port=8000, debug=False)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("RADISWAP_HOST", "127.0.0.1")
        monkeypatch.setenv("RADISWAP_PORT", "9001")
        monkeypatch.setenv("RADISWAP_DEBUG", "yes")
        settings = ServiceSettings.from_env()
        assert settings == ServiceSettings(host="127.0.0.1", port=9001, debug=True)
