"""Tests for service configuration.

These tests cover:
1. Default values
2. Environment variable loading
3. Field validation
4. The cached instance used by the entry point
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from infobooks.config import ServiceConfig, get_config, reset_config


@pytest.mark.usefixtures("clean_env")
class TestServiceConfig:
    """Test loan service configuration behavior."""

    def test_default_configuration(self):
        config = ServiceConfig(_env_file=None)

        assert config.server_name == "infobooks"
        assert config.server_version == "0.1.0"
        assert config.transport == "stdio"
        assert config.loan_period_days == 14
        assert config.seed_sample_data is True
        assert config.debug is False
        assert config.log_level == "INFO"

    def test_environment_variable_loading(self):
        env_vars = {
            "INFOBOOKS_SERVER_NAME": "test-library",
            "INFOBOOKS_SERVER_VERSION": "2.0.0",
            "INFOBOOKS_TRANSPORT": "streamable_http",
            "INFOBOOKS_HTTP_PORT": "9000",
            "INFOBOOKS_LOAN_PERIOD_DAYS": "7",
            "INFOBOOKS_SEED_SAMPLE_DATA": "false",
            "INFOBOOKS_LOG_LEVEL": "debug",
        }

        with patch.dict(os.environ, env_vars):
            config = ServiceConfig(_env_file=None)

        assert config.server_name == "test-library"
        assert config.server_version == "2.0.0"
        assert config.transport == "streamable_http"
        assert config.http_port == 9000
        assert config.loan_period_days == 7
        assert config.seed_sample_data is False
        # Lowercase levels are accepted and normalized
        assert config.log_level == "DEBUG"
        assert config.is_development is True

    def test_server_name_validation(self):
        for name in ["infobooks", "test-123", "my-library"]:
            assert ServiceConfig(_env_file=None, server_name=name).server_name == name

        for name in ["InfoBooks", "info books", "info_books", "ab", "a" * 51]:
            with pytest.raises(ValidationError):
                ServiceConfig(_env_file=None, server_name=name)

    def test_version_must_be_semver(self):
        assert ServiceConfig(_env_file=None, server_version="1.2.3-beta.1").server_version == (
            "1.2.3-beta.1"
        )
        with pytest.raises(ValidationError):
            ServiceConfig(_env_file=None, server_version="1.2")

    def test_transport_validation(self):
        with pytest.raises(ValidationError):
            ServiceConfig(_env_file=None, transport="websocket")

    @pytest.mark.parametrize("port", [80, 1023, 65536, 5432, 6379])
    def test_rejected_ports(self, port):
        with pytest.raises(ValidationError):
            ServiceConfig(_env_file=None, http_port=port)

    @pytest.mark.parametrize("days", [0, -1, 366])
    def test_loan_period_bounds(self, days):
        with pytest.raises(ValidationError):
            ServiceConfig(_env_file=None, loan_period_days=days)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            ServiceConfig(_env_file=None, log_level="VERBOSE")

    def test_server_info(self):
        config = ServiceConfig(_env_file=None)
        assert config.server_info == {
            "name": "infobooks",
            "version": "0.1.0",
            "transport": "stdio",
        }


@pytest.mark.usefixtures("clean_env")
class TestConfigSingleton:
    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reset_config_reloads_environment(self):
        first = get_config()

        with patch.dict(os.environ, {"INFOBOOKS_LOAN_PERIOD_DAYS": "21"}):
            assert get_config().loan_period_days == first.loan_period_days
            reset_config()
            assert get_config().loan_period_days == 21
