import logging
import os
from unittest.mock import patch

import pytest

from datapoint_api.config import DataPointConfig


@pytest.fixture
def clean_env():
    """Run the test with no configuration variables set."""
    with patch.dict(os.environ, {}, clear=True):
        yield


class TestDataPointConfig:
    """Test cases for DataPointConfig."""

    def test_default_config(self, clean_env):
        """Test default configuration values."""
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2"}):
            config = DataPointConfig()

            assert config.region_name == "us-west-2"
            assert config.max_pool_connections == 50
            assert config.retries == 3
            assert config.timeout_seconds == 30.0
            assert config.environment == "dev"
            assert config.allow_mutations is False
            assert config.error_mode == "lenient"
            assert config.strict is False
            assert config.default_page_limit == 100
            assert config.table_name is None

    def test_config_from_env_vars(self, clean_env):
        """Test configuration from environment variables."""
        env_vars = {
            "AWS_ACCESS_KEY_ID": "test_key",
            "AWS_SECRET_ACCESS_KEY": "test_secret",
            "AWS_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
            "DYNAMODB_TABLE_PREFIX": "test",
            "ENVIRONMENT": "staging",
            "TABLE": "DataPoint-abc123",
            "ALLOW": "true",
            "DATAPOINT_ERROR_MODE": "strict",
            "DATAPOINT_PAGE_LIMIT": "25",
        }

        with patch.dict(os.environ, env_vars):
            config = DataPointConfig.from_env()

            assert config.aws_access_key_id == "test_key"
            assert config.aws_secret_access_key == "test_secret"
            assert config.region_name == "eu-west-1"
            assert config.endpoint_url == "http://localhost:8000"
            assert config.table_prefix == "test"
            assert config.environment == "staging"
            assert config.table_name == "DataPoint-abc123"
            assert config.allow_mutations is True
            assert config.strict is True
            assert config.default_page_limit == 25

    @pytest.mark.parametrize("flag", ["false", "TRUE ", "1", "yes", ""])
    def test_allow_flag_requires_exact_true(self, clean_env, flag):
        """Test only the value "true" (any case) enables mutations."""
        with patch.dict(os.environ, {"ALLOW": flag}):
            assert DataPointConfig().allow_mutations is False

    def test_allow_flag_is_case_insensitive(self, clean_env):
        """Test ALLOW=True enables mutations."""
        with patch.dict(os.environ, {"ALLOW": "True"}):
            assert DataPointConfig().allow_mutations is True

    def test_explicit_table_name_wins(self, clean_env):
        """Test the TABLE value overrides derived naming."""
        config = DataPointConfig(table_name="DataPoint-abc123", table_prefix="myapp", environment="dev")

        assert config.get_table_name() == "DataPoint-abc123"
        assert config.get_table_name("other") == "DataPoint-abc123"

    def test_table_name_generation(self, clean_env):
        """Test table name generation with prefix and environment."""
        config = DataPointConfig(
            table_prefix="myapp",
            environment="dev"
        )

        assert config.get_table_name() == "myapp_dev_data_points"
        assert config.get_table_name("readings") == "myapp_dev_readings"

    def test_table_name_generation_prod(self, clean_env):
        """Test table name generation in production (no environment suffix)."""
        config = DataPointConfig(
            table_prefix="myapp",
            environment="prod"
        )

        assert config.get_table_name() == "myapp_data_points"

    def test_table_name_generation_no_prefix(self, clean_env):
        """Test table name generation without prefix."""
        config = DataPointConfig(environment="dev")

        assert config.get_table_name() == "dev_data_points"

    def test_local_development_config(self, clean_env):
        """Test local development configuration."""
        config = DataPointConfig.for_local_development()

        assert config.aws_access_key_id == "local"
        assert config.aws_secret_access_key == "local"
        assert config.endpoint_url == "http://localhost:8000"
        assert config.environment == "dev"
        assert config.allow_mutations is True
        assert config.enable_debug_logging is True

    def test_environment_validation(self, clean_env):
        """Test environment validation."""
        with pytest.raises(ValueError, match="Environment must be one of"):
            DataPointConfig(environment="invalid")

    def test_region_validation(self, clean_env):
        """Test region validation."""
        with pytest.raises(ValueError, match="AWS region name is required"):
            DataPointConfig(region_name="")

    def test_error_mode_validation(self, clean_env):
        """Test error mode validation."""
        with pytest.raises(ValueError, match="Error mode must be one of"):
            DataPointConfig(error_mode="loose")

    def test_page_limit_validation(self, clean_env):
        """Test the default page size must be positive."""
        with pytest.raises(ValueError):
            DataPointConfig(default_page_limit=0)

    def test_configure_logging(self, clean_env):
        """Test debug logging raises the package logger level."""
        package_logger = logging.getLogger("datapoint_api")
        previous = package_logger.level
        try:
            DataPointConfig(enable_debug_logging=True).configure_logging()
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(previous)
