"""
Write-side DTOs and Resolver Argument Models

These models validate what arrives from the field resolver before it
reaches the read API or the write pipeline:
- DataPointCreate: input of the createDataPoint mutation
- ListDataPointsArguments: arguments of the listDataPoints query

Wire names (camelCase) are accepted through aliases; Python code uses the
snake_case field names.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .domain_models import PARTITION_KEY_SEPARATOR, DataPoint, RangeFilter, SortDirection

# Key attributes under both their stored and their Python names
RESERVED_ATTRIBUTES = frozenset({'PK', 'SK', 'partition_key', 'sort_key'})


def build_partition_key(owner: str, name: str) -> str:
    """Build the partition key shared by all records of one series.

    Examples:
        >>> build_partition_key("u1", "d1")
        'u1#d1'
    """
    return f"{owner}{PARTITION_KEY_SEPARATOR}{name}"


class DataPointCreate(BaseModel):
    """
    Input for creating a single data point.

    Any attribute beyond owner, name and createdAt is payload and is stored
    as given. The key attributes themselves are derived, never accepted.
    """

    owner: str = Field(..., min_length=1, max_length=128, description="Owner identifier")
    name: str = Field(..., min_length=1, max_length=256, description="Data point series name")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Creation time; defaults to now (UTC)")

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True
    )

    @field_validator('owner', 'name')
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @model_validator(mode='after')
    def validate_reserved_attributes(self) -> 'DataPointCreate':
        """Reject payload attributes that would overwrite the record key."""
        reserved = RESERVED_ATTRIBUTES.intersection(self.model_extra or {})
        if reserved:
            raise ValueError(f"Attributes {sorted(reserved)} are derived and cannot be supplied")
        return self

    @property
    def payload(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    def to_data_point(self, now: Optional[datetime] = None) -> DataPoint:
        """
        Build the record to persist.

        The sort key is the creation time as an ISO-8601 UTC string, so
        lexicographic order on SK is chronological order.

        Args:
            now: Timestamp used when created_at was not supplied

        Returns:
            DataPoint ready for storage
        """
        from ..utils import to_utc

        created_at = self.created_at or now or datetime.now(timezone.utc)
        sort_key = to_utc(created_at).isoformat()

        return DataPoint.model_validate({
            **self.payload,
            'PK': build_partition_key(self.owner, self.name),
            'SK': sort_key,
            'owner': self.owner,
            'name': self.name,
            'createdAt': sort_key,
        })


class ListDataPointsArguments(BaseModel):
    """Arguments of the listDataPoints query field."""

    owner: str = Field(..., min_length=1, description="Owner identifier")
    name: str = Field(..., min_length=1, description="Data point series name")
    created_at: Optional[Dict[str, Any]] = Field(None, alias="createdAt", description="Range filter wire shape")
    limit: Optional[int] = Field(None, ge=1, description="Page size; the configured default applies when omitted")
    next_token: Optional[str] = Field(None, alias="nextToken", description="Opaque cursor from a previous page")
    sort_direction: str = Field(SortDirection.ASC.value, alias="sortDirection", description="ASC scans forward, anything else backward")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def range_filter(self) -> Optional[RangeFilter]:
        return RangeFilter.from_wire(self.created_at)
