"""
Core infrastructure components shared by the read API and the write pipeline.

- TableGateway: thin wrapper over the boto3 table resource
- RangeExpressionBuilder: sort key predicates from range filters
- CursorCodec: opaque pagination tokens
"""

from .cursor import CursorCodec
from .expressions import (
    EMPTY_RANGE_EXPRESSION,
    RANGE_TEMPLATES,
    RangeExpression,
    RangeExpressionBuilder,
    build_range_expression,
)
from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error

__all__ = [
    "CursorCodec",
    "EMPTY_RANGE_EXPRESSION",
    "RANGE_TEMPLATES",
    "RangeExpression",
    "RangeExpressionBuilder",
    "build_range_expression",
    "TableGateway",
    "create_table_gateway",
    "map_dynamodb_error",
]
