"""
Data Point API

Partitioned, sort-key-ordered data points on DynamoDB with:
- paginated range queries over one owner#name partition, using opaque
  continuation tokens
- a create pipeline gated by an allow/deny authorization check

Built on boto3 and Pydantic.
"""

from .config import DataPointConfig
from .exceptions import (
    ConflictError,
    ConnectionError,
    DataPointApiError,
    MalformedCursorError,
    QueryFailedError,
    RetryableError,
    UnauthorizedError,
    UnsupportedFilterOperatorError,
    ValidationError,
    WriteFailedError,
)
from .models import (
    DataPoint,
    DataPointCreate,
    DataPointPage,
    ListDataPointsArguments,
    RangeFilter,
    RangeOperator,
    SortDirection,
    build_partition_key,
)
from .core import (
    CursorCodec,
    RangeExpression,
    RangeExpressionBuilder,
    TableGateway,
    create_table_gateway,
)
from .handlers import (
    AuthorizationDecision,
    AuthorizationGate,
    AuthorizationPolicy,
    DataPointResolver,
    DataPointsReadApi,
    DataPointsWriteApi,
    EnvironmentFlagPolicy,
    PipelineContext,
    PipelineExecutor,
    PipelineOutcome,
    PipelineStep,
    StaticPolicy,
    StepOutcome,
    build_create_pipeline,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DataPointConfig",

    # Exceptions
    "ConflictError",
    "ConnectionError",
    "DataPointApiError",
    "MalformedCursorError",
    "QueryFailedError",
    "RetryableError",
    "UnauthorizedError",
    "UnsupportedFilterOperatorError",
    "ValidationError",
    "WriteFailedError",

    # Models
    "DataPoint",
    "DataPointCreate",
    "DataPointPage",
    "ListDataPointsArguments",
    "RangeFilter",
    "RangeOperator",
    "SortDirection",
    "build_partition_key",

    # Core
    "CursorCodec",
    "RangeExpression",
    "RangeExpressionBuilder",
    "TableGateway",
    "create_table_gateway",

    # Read/write APIs and the create pipeline
    "AuthorizationDecision",
    "AuthorizationGate",
    "AuthorizationPolicy",
    "DataPointResolver",
    "DataPointsReadApi",
    "DataPointsWriteApi",
    "EnvironmentFlagPolicy",
    "PipelineContext",
    "PipelineExecutor",
    "PipelineOutcome",
    "PipelineStep",
    "StaticPolicy",
    "StepOutcome",
    "build_create_pipeline",
]
