"""
Domain Models for the Data Point API

Organized by concern:
1. Table metadata (key attribute names per model)
2. DataPoint, the stored record
3. Range filters and sort direction for partition queries
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .base import DynamoDBMixin

PARTITION_KEY_SEPARATOR = "#"


# =============================================================================
# DynamoDB Table Metadata Classes
# =============================================================================

class TableMeta:
    """Base class for table metadata definitions."""
    table_name: str
    partition_key: str
    sort_key: Optional[str] = None

    @classmethod
    def get_key_fields(cls) -> List[str]:
        """Get DynamoDB item key field names.

        Returns the list of fields that form the DynamoDB item key:
        - For simple keys: [partition_key]
        - For composite keys: [partition_key, sort_key]
        """
        fields = [cls.partition_key]
        if cls.sort_key:
            fields.append(cls.sort_key)
        return fields


# =============================================================================
# Data Point Domain
# =============================================================================

class DataPoint(DynamoDBMixin, BaseModel):
    """
    A record in the data point table.

    Identified by ``PK`` (``owner#name``) and ``SK`` (an orderable string,
    an ISO-8601 UTC timestamp for records created through the write API).
    Every other attribute is opaque payload and is kept as stored.
    """

    partition_key: str = Field(..., alias="PK", description="owner#name")
    sort_key: str = Field(..., alias="SK", description="Orderable sort key, usually the creation timestamp")

    owner: Optional[str] = Field(None, description="Owner identifier")
    name: Optional[str] = Field(None, description="Data point series name")
    created_at: Optional[str] = Field(None, alias="createdAt", description="Creation timestamp (ISO-8601)")

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True
    )

    class Meta(TableMeta):
        table_name = "data_points"
        partition_key = "PK"
        sort_key = "SK"

    @property
    def key(self) -> Dict[str, str]:
        """Primary key of this record as a DynamoDB key dictionary."""
        return {
            self.Meta.partition_key: self.partition_key,
            self.Meta.sort_key: self.sort_key,
        }

    def to_response(self) -> Dict[str, Any]:
        """Render the record the way resolvers return it."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Query Models
# =============================================================================

class SortDirection(str, Enum):
    """Scan direction over the sort key."""
    ASC = "ASC"
    DESC = "DESC"


class RangeOperator(str, Enum):
    """Range filter operators, valued by their wire keys."""
    GREATER_THAN = "gt"
    EQUAL = "eq"
    LESS_OR_EQUAL = "le"
    LESS_THAN = "lt"
    GREATER_OR_EQUAL = "ge"
    BETWEEN = "between"
    BEGINS_WITH = "beginsWith"


class RangeFilter(BaseModel):
    """
    A single comparison over the sort key.

    ``operator`` is kept as the raw wire key so unrecognized operators reach
    the expression builder, which decides whether to ignore or reject them.
    ``between`` carries (lower, upper) in caller order; every other operator
    carries exactly one operand.
    """

    operator: str = Field(..., min_length=1, description="Wire key of the operator (gt, eq, le, lt, ge, between, beginsWith)")
    operands: Tuple[Any, ...] = Field(..., min_length=1, max_length=2, description="Operand values")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_wire(cls, wire: Any) -> Optional['RangeFilter']:
        """Build a filter from its wire shape, e.g. ``{"between": ["a", "b"]}``.

        Args:
            wire: Mapping with exactly one operator key, an existing
                RangeFilter, or None

        Returns:
            RangeFilter, or None when no filter was supplied

        Raises:
            ValidationError: If the shape is not a single-key mapping or a
                ``between`` operand is not a two-element sequence
        """
        from ..exceptions import ValidationError

        if wire is None:
            return None
        if isinstance(wire, RangeFilter):
            return wire
        if not isinstance(wire, dict):
            raise ValidationError(
                f"Range filter must be an object, got {type(wire).__name__}",
                errors={'filter': repr(wire)}
            )
        if not wire:
            return None
        if len(wire) > 1:
            raise ValidationError(
                f"Range filter must have exactly one operator, got {sorted(wire)}",
                errors={'filter': sorted(wire)}
            )

        operator, value = next(iter(wire.items()))
        if operator == RangeOperator.BETWEEN.value:
            if not isinstance(value, (list, tuple)) or len(value) != 2:
                raise ValidationError(
                    "'between' requires a two-element [lower, upper] sequence",
                    errors={'between': repr(value)}
                )
            operands = tuple(value)
        else:
            operands = (value,)

        return cls(operator=operator, operands=operands)

    @property
    def is_between(self) -> bool:
        return self.operator == RangeOperator.BETWEEN.value
