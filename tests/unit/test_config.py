"""Tests for router configuration."""

import pytest

from clmm_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig


class TestRouterConfig:
    """Tests for RouterConfig defaults and validation."""

    def test_defaults(self):
        config = RouterConfig()
        assert config.max_parallelism == 8
        assert config.per_pool_timeout_seconds == 5.0
        assert config.default_slippage_bps == 500
        assert config.tick_array_size == 60
        assert config == DEFAULT_ROUTER_CONFIG

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_parallelism": 0},
            {"per_pool_timeout_seconds": 0},
            {"default_slippage_bps": 501},
            {"default_slippage_bps": -1},
            {"tick_array_size": 0},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError):
            RouterConfig(**kwargs)


class TestFromEnv:
    """Tests for RouterConfig.from_env."""

    def test_empty_env_gives_defaults(self):
        assert RouterConfig.from_env({}) == RouterConfig()

    def test_reads_variables(self):
        config = RouterConfig.from_env(
            {
                "CLMM_ROUTER_MAX_PARALLELISM": "3",
                "CLMM_ROUTER_POOL_TIMEOUT": "0.5",
                "CLMM_ROUTER_DEFAULT_SLIPPAGE_BPS": "50",
            }
        )
        assert config.max_parallelism == 3
        assert config.per_pool_timeout_seconds == 0.5
        assert config.default_slippage_bps == 50

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("CLMM_ROUTER_MAX_PARALLELISM", "2")
        assert RouterConfig.from_env().max_parallelism == 2

    def test_invalid_env_value_raises(self):
        with pytest.raises(ValueError):
            RouterConfig.from_env({"CLMM_ROUTER_DEFAULT_SLIPPAGE_BPS": "900"})
