"""
Read-side View Models

A page of a partition query plus the opaque token for the next page and
whatever metadata the store reported (Count, ScannedCount, ConsumedCapacity).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .domain_models import DataPoint

# Response keys from a boto3 Query that are passed through to callers
PASSTHROUGH_METADATA_KEYS = ('Count', 'ScannedCount', 'ConsumedCapacity')


class DataPointPage(BaseModel):
    """One page of a partition query."""

    items: List[DataPoint] = Field(default_factory=list, description="Records in sort key order")
    next_token: Optional[str] = Field(None, description="Opaque cursor for the next page; None on the last page")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Store metadata passed through from the query response")

    @property
    def has_more(self) -> bool:
        return self.next_token is not None

    def to_response(self) -> Dict[str, Any]:
        """
        Render the page in the resolver's wire shape.

        Returns:
            ``{"items": [...], "nextToken": str|None, **metadata}``
        """
        return {
            'items': [item.to_response() for item in self.items],
            'nextToken': self.next_token,
            **self.metadata,
        }
