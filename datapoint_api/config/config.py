import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()

DEFAULT_TABLE_BASE_NAME = "data_points"

ERROR_MODE_LENIENT = "lenient"
ERROR_MODE_STRICT = "strict"


class DataPointConfig(BaseModel):
    """Configuration for the data point store, its query API and write pipeline."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    # DynamoDB specific settings
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    # Table configuration
    table_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("TABLE"),
        description="Full table name; overrides prefix/environment naming when set"
    )

    table_prefix: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_TABLE_PREFIX", ""),
        description="Prefix to add to derived table names"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="botocore transport retry attempts"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Environment settings
    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, test, staging, prod)"
    )

    # Authorization settings
    allow_mutations: bool = Field(
        default_factory=lambda: os.getenv("ALLOW", "false").lower() == "true",
        description="Decision returned by the environment flag authorization policy"
    )

    # Query behavior
    error_mode: str = Field(
        default_factory=lambda: os.getenv("DATAPOINT_ERROR_MODE", ERROR_MODE_LENIENT),
        description="'lenient' hides unknown filters and query failures, 'strict' raises typed errors"
    )

    default_page_limit: int = Field(
        default_factory=lambda: int(os.getenv("DATAPOINT_PAGE_LIMIT", "100")),
        ge=1,
        description="Page size used when a query does not pass a limit"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("DYNAMODB_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for store operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'test', 'staging', 'prod']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator('error_mode')
    @classmethod
    def validate_error_mode(cls, v):
        """Validate error mode value."""
        valid_modes = [ERROR_MODE_LENIENT, ERROR_MODE_STRICT]
        if v not in valid_modes:
            raise ValueError(f"Error mode must be one of: {valid_modes}")
        return v

    @property
    def strict(self) -> bool:
        """Whether unknown filters and query failures surface as typed errors."""
        return self.error_mode == ERROR_MODE_STRICT

    def get_table_name(self, base_name: str = DEFAULT_TABLE_BASE_NAME) -> str:
        """Get the full table name.

        An explicit ``table_name`` wins. Otherwise the name is built from the
        prefix, the environment (omitted in prod) and ``base_name``.

        Args:
            base_name: Base table name

        Returns:
            Full table name
        """
        if self.table_name:
            return self.table_name

        parts = []

        if self.table_prefix:
            parts.append(self.table_prefix)

        if self.environment != "prod":
            parts.append(self.environment)

        parts.append(base_name)

        return "_".join(parts)

    def configure_logging(self) -> None:
        """Raise the package logger to DEBUG when debug logging is enabled."""
        if self.enable_debug_logging:
            logging.getLogger("datapoint_api").setLevel(logging.DEBUG)

    @classmethod
    def from_env(cls) -> 'DataPointConfig':
        """Create configuration from environment variables.

        Returns:
            DataPointConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls) -> 'DataPointConfig':
        """Create configuration for DynamoDB Local.

        Returns:
            DataPointConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url="http://localhost:8000",
            environment="dev",
            allow_mutations=True,
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
