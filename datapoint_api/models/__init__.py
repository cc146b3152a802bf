# Base mixins
from .base import DynamoDBMixin

# Core domain models
from .domain_models import (
    PARTITION_KEY_SEPARATOR,
    TableMeta,
    DataPoint,
    SortDirection,
    RangeOperator,
    RangeFilter,
)

# Read-side views
from .views import DataPointPage

# Write-side DTOs and resolver arguments
from .dtos import (
    DataPointCreate,
    ListDataPointsArguments,
    build_partition_key,
)

__all__ = [
    # Base mixins
    "DynamoDBMixin",

    # Domain models
    "PARTITION_KEY_SEPARATOR",
    "TableMeta",
    "DataPoint",
    "SortDirection",
    "RangeOperator",
    "RangeFilter",

    # Views
    "DataPointPage",

    # DTOs
    "DataPointCreate",
    "ListDataPointsArguments",
    "build_partition_key",
]
