# tests/test_config.py
"""Tests for WindowConfig defaults and validation."""

import pytest
from pydantic import ValidationError

from prompt_context import (
    MAX_TOKENS_CEILING,
    CompressionStrategy,
    ErrorCode,
    InvalidParameterError,
    WindowConfig,
    is_valid_config,
    validate_config,
)


class TestDefaults:
    def test_default_values(self):
        config = WindowConfig.default()
        assert config.max_tokens == 2048
        assert config.min_tokens_reserve == 0
        assert config.compression == CompressionStrategy.LOW_PRIORITY_FIRST
        assert config.metrics_enabled is True
        assert config.thread_safe is False
        assert config.token_ratio == 4
        assert config.auto_compress is True
        assert config.lock_timeout is None

    def test_defaults_validate(self):
        assert is_valid_config(WindowConfig.default())


class TestValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_tokens": 0},
            {"max_tokens": -100},
            {"max_tokens": MAX_TOKENS_CEILING + 1},
            {"token_ratio": 0},
            {"token_ratio": -4},
            {"min_tokens_reserve": -1},
            {"min_tokens_reserve": 2048},
            {"max_tokens": 100, "min_tokens_reserve": 150},
            {"lock_timeout": 0},
        ],
    )
    def test_rejects_invalid(self, overrides):
        config = WindowConfig.default().model_copy(update=overrides)
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_config(config)
        assert exc_info.value.code == ErrorCode.INVALID_PARAMETER
        assert not is_valid_config(config)

    def test_accepts_boundaries(self):
        assert is_valid_config({"max_tokens": 1})
        assert is_valid_config({"max_tokens": MAX_TOKENS_CEILING})
        assert is_valid_config({"max_tokens": 100, "min_tokens_reserve": 99})
        assert is_valid_config({"token_ratio": 1})

    def test_returns_fresh_copy(self):
        config = WindowConfig(max_tokens=300)
        checked = validate_config(config)
        assert checked == config
        assert checked is not config

    def test_dict_input(self):
        checked = validate_config({"max_tokens": 500, "compression": 3})
        assert checked.compression == CompressionStrategy.AGGRESSIVE

    def test_unknown_strategy_rejected(self):
        assert not is_valid_config({"compression": 7})

    def test_none_rejected(self):
        with pytest.raises(InvalidParameterError):
            validate_config(None)

    def test_direct_construction_uses_pydantic_errors(self):
        with pytest.raises(ValidationError):
            WindowConfig(max_tokens=0)

    def test_invalid_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_config({"token_ratio": 0})


class TestEnvironmentDefaults:
    def test_module_defaults(self):
        from prompt_context import config

        assert config.DEFAULT_MAX_TOKENS == 2048
        assert config.DEFAULT_TOKEN_RATIO == 4
        assert config.DEFAULT_METRICS_ENABLED is True

    @pytest.mark.parametrize(
        "value, expected",
        [("true", True), ("1", True), ("YES", True), ("false", False), ("0", False)],
    )
    def test_env_bool(self, monkeypatch, value, expected):
        from prompt_context.config import _env_bool

        monkeypatch.setenv("PCC_TEST_FLAG", value)
        assert _env_bool("PCC_TEST_FLAG", not expected) is expected

    def test_env_bool_default(self, monkeypatch):
        from prompt_context.config import _env_bool

        monkeypatch.delenv("PCC_TEST_FLAG", raising=False)
        assert _env_bool("PCC_TEST_FLAG", True) is True
