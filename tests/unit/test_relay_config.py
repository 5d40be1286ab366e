"""
Relay Configuration Tests

Environment loading, defaults, and fail-fast validation.
"""

import logging

import pytest

from config import DEFAULT_CAMUNDA_WEBHOOK_URL, ConfigurationError, RelayConfig


REQUIRED_ENV = {
    "WA_APP_SECRET": "app_secret",
}


class TestFromEnv:

    def test_defaults(self):
        config = RelayConfig.from_env(REQUIRED_ENV)

        assert config.port == 3000
        assert config.host == "0.0.0.0"
        assert config.verify_token == "ThisIsATest"
        assert config.camunda_webhook_url == DEFAULT_CAMUNDA_WEBHOOK_URL
        assert config.camunda_basic_user == "webhook"
        assert config.camunda_basic_pass == "test123"
        assert config.camunda_timeout_seconds == 10.0
        assert config.log_level == "info"

    def test_overrides(self):
        config = RelayConfig.from_env({
            "PORT": "8080",
            "WA_VERIFY_TOKEN": "token",
            "WA_APP_SECRET": "secret",
            "CAMUNDA_WEBHOOK_URL": "https://camunda.example.com/hook",
            "CAMUNDA_BASIC_USER": "user",
            "CAMUNDA_BASIC_PASS": "pass",
            "CAMUNDA_TIMEOUT_SECONDS": "2.5",
            "LOG_LEVEL": "DEBUG",
        })

        assert config.port == 8080
        assert config.verify_token == "token"
        assert config.app_secret == "secret"
        assert config.camunda_webhook_url == "https://camunda.example.com/hook"
        assert config.camunda_basic_user == "user"
        assert config.camunda_basic_pass == "pass"
        assert config.camunda_timeout_seconds == 2.5
        assert config.log_level == "debug"

    def test_empty_values_fall_back_to_defaults(self):
        config = RelayConfig.from_env({
            **REQUIRED_ENV,
            "CAMUNDA_WEBHOOK_URL": "",
            "CAMUNDA_BASIC_PASS": "",
        })

        assert config.camunda_webhook_url == DEFAULT_CAMUNDA_WEBHOOK_URL
        assert config.camunda_basic_pass == "test123"

    def test_unknown_log_level_falls_back_to_info(self):
        assert RelayConfig.from_env({**REQUIRED_ENV, "LOG_LEVEL": "verbose"}).log_level == "info"

    def test_bad_port_rejected(self):
        with pytest.raises(ConfigurationError):
            RelayConfig.from_env({**REQUIRED_ENV, "PORT": "eighty"})

    def test_bad_timeout_rejected(self):
        with pytest.raises(ConfigurationError):
            RelayConfig.from_env({**REQUIRED_ENV, "CAMUNDA_TIMEOUT_SECONDS": "soon"})

    def test_config_is_immutable(self):
        config = RelayConfig.from_env(REQUIRED_ENV)
        with pytest.raises(AttributeError):
            config.app_secret = "other"


class TestValidate:

    def test_missing_app_secret(self):
        config = RelayConfig.from_env({})
        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()
        assert "WA_APP_SECRET" in str(exc_info.value)

    def test_missing_camunda_values(self, relay_config):
        from dataclasses import replace

        config = replace(relay_config, camunda_webhook_url="", camunda_basic_pass="")
        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        assert "CAMUNDA_WEBHOOK_URL" in str(exc_info.value)
        assert "CAMUNDA_BASIC_PASS" in str(exc_info.value)

    def test_valid_config_returns_self(self, relay_config):
        assert relay_config.validate() is relay_config


class TestLoggingLevel:

    @pytest.mark.parametrize("level,expected", [
        ("silent", logging.WARNING),
        ("info", logging.INFO),
        ("debug", logging.DEBUG),
    ])
    def test_mapping(self, level, expected):
        config = RelayConfig.from_env({**REQUIRED_ENV, "LOG_LEVEL": level})
        assert config.logging_level == expected
