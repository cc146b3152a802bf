"""
Data Points Read API

Paginated range queries over one partition (``owner#name``):
- Sort key predicates from RangeExpressionBuilder
- Opaque continuation tokens from CursorCodec
- One Query per call, no retries

In lenient mode (the default) a failed query is logged and reported as
"no result" (None); in strict mode it raises QueryFailedError.
"""

import logging
from typing import Any, Dict, Optional, Union

from ...config import DataPointConfig
from ...core import CursorCodec, RangeExpressionBuilder, create_table_gateway
from ...exceptions import DataPointApiError, QueryFailedError, ValidationError
from ...models import (
    DataPoint,
    DataPointPage,
    RangeFilter,
    SortDirection,
    build_partition_key,
)
from ...models.views import PASSTHROUGH_METADATA_KEYS
from ...utils import build_model_key, item_to_model

logger = logging.getLogger(__name__)

PARTITION_KEY_NAME = "#PK"
PARTITION_KEY_VALUE = ":PK"


class DataPointsReadApi:
    """
    Read-only API for data point queries.

    Each call builds its query from scratch; the only state kept between
    calls is the gateway's boto3 resource.
    """

    def __init__(self, config: DataPointConfig):
        """Initialize read API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config, DataPoint.Meta.table_name)
        self.expression_builder = RangeExpressionBuilder(sort_key=DataPoint.Meta.sort_key, strict=config.strict)
        self.cursor_codec = CursorCodec()

    def _decode_start_key(self, next_token: Optional[str], partition_key: str) -> Optional[Dict[str, Any]]:
        """Decode the incoming cursor, dropping cursors that cannot resume this partition."""
        start_key = self.cursor_codec.decode(next_token)
        if start_key is None:
            return None

        key_fields = DataPoint.Meta.get_key_fields()
        if set(start_key) != set(key_fields) or not all(isinstance(start_key[k], str) for k in key_fields):
            logger.warning(f"Ignoring nextToken without a {'/'.join(key_fields)} string key: {sorted(start_key)}")
            return None

        if start_key[DataPoint.Meta.partition_key] != partition_key:
            logger.warning(f"Ignoring nextToken issued for a different partition than '{partition_key}'")
            return None
        return start_key

    def build_query(
        self,
        owner: str,
        name: str,
        range_filter: Optional[Union[RangeFilter, Dict[str, Any]]] = None,
        limit: Optional[int] = None,
        next_token: Optional[str] = None,
        sort_direction: str = SortDirection.ASC.value
    ) -> Dict[str, Any]:
        """
        Build the boto3 Query parameters for one page of a partition.

        Returns:
            Keyword arguments for TableGateway.query

        Raises:
            ValidationError: Invalid limit or filter shape
            UnsupportedFilterOperatorError: Unknown operator in strict mode
        """
        if limit is None:
            limit = self.config.default_page_limit
        if limit < 1:
            raise ValidationError(f"limit must be at least 1, got {limit}", errors={'limit': limit})

        partition_key = build_partition_key(owner, name)
        range_expression = self.expression_builder.build(RangeFilter.from_wire(range_filter))

        key_condition = f"{PARTITION_KEY_NAME} = {PARTITION_KEY_VALUE}"
        if not range_expression.is_empty:
            key_condition += f" AND {range_expression.expression}"

        query_kwargs = {
            'KeyConditionExpression': key_condition,
            'ExpressionAttributeNames': {
                PARTITION_KEY_NAME: DataPoint.Meta.partition_key,
                **range_expression.names
            },
            'ExpressionAttributeValues': {
                PARTITION_KEY_VALUE: partition_key,
                **range_expression.values
            },
            'ScanIndexForward': sort_direction == SortDirection.ASC.value,
            'Limit': limit,
        }

        start_key = self._decode_start_key(next_token, partition_key)
        if start_key:
            query_kwargs['ExclusiveStartKey'] = start_key

        return query_kwargs

    def list_by_partition(
        self,
        owner: str,
        name: str,
        range_filter: Optional[Union[RangeFilter, Dict[str, Any]]] = None,
        limit: Optional[int] = None,
        next_token: Optional[str] = None,
        sort_direction: str = SortDirection.ASC.value
    ) -> Optional[DataPointPage]:
        """
        List one page of data points in the ``owner#name`` partition.

        DynamoDB Operation: Query on the table's primary key
        Key Condition: PK = owner#name [AND <sort key predicate>]

        Args:
            owner: Owner identifier
            name: Series name
            range_filter: RangeFilter or its wire shape, e.g. {"gt": "2024-01-01"}
            limit: Maximum items to return (config default_page_limit if None)
            next_token: Cursor from a previous page
            sort_direction: "ASC" scans forward, anything else backward

        Returns:
            DataPointPage, or None if the query failed in lenient mode

        Raises:
            QueryFailedError: Store failure in strict mode
            ValidationError: Invalid limit or filter shape

        Examples:
            >>> page = api.list_by_partition("u1", "d1", {"between": ["2024-01-01", "2024-01-31"]}, limit=10)
            >>> more = api.list_by_partition("u1", "d1", {"between": ["2024-01-01", "2024-01-31"]},
            ...                              limit=10, next_token=page.next_token)
        """
        query_kwargs = self.build_query(owner, name, range_filter, limit, next_token, sort_direction)
        partition_key = query_kwargs['ExpressionAttributeValues'][PARTITION_KEY_VALUE]
        logger.debug(f"Query parameters: {query_kwargs}")

        try:
            response = self.gateway.query(**query_kwargs)
            items = [item_to_model(item, DataPoint) for item in response.get('Items', [])]
        except DataPointApiError as e:
            logger.error(f"Error in list_by_partition for '{partition_key}': {e}")
            if self.config.strict:
                raise QueryFailedError(f"Failed to query data points: {e}", partition_key, original_error=e) from e
            return None

        metadata = {k: response[k] for k in PASSTHROUGH_METADATA_KEYS if k in response}
        return DataPointPage(
            items=items,
            next_token=self.cursor_codec.encode(response.get('LastEvaluatedKey')),
            metadata=metadata
        )

    def get_by_key(self, owner: str, name: str, sort_key: str) -> Optional[DataPoint]:
        """
        Get a single data point by its full key.

        DynamoDB Operation: GetItem with primary key

        Returns:
            DataPoint if found, None otherwise
        """
        key = build_model_key(DataPoint, PK=build_partition_key(owner, name), SK=sort_key)
        item = self.gateway.get_item(key)
        if item is None:
            return None
        return item_to_model(item, DataPoint)
