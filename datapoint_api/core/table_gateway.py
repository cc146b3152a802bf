"""
Thin DynamoDB Table Gateway

The gateway is the only place that talks to boto3. It provides the two store
primitives the rest of the package is built on:

- query: partition key equality, optional sort key predicate, scan direction,
  page size and resume key, passed through as raw boto3 keyword arguments
- put_item: a single conditional write

plus get_item for point reads. Every botocore ClientError is translated into
a domain exception by map_dynamodb_error, so callers never see botocore types.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import DataPointConfig
from ..exceptions import (
    ConflictError,
    ConnectionError,
    DataPointApiError,
    RetryableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# botocore error code -> (domain error, label); anything unlisted is a ConnectionError
ERROR_CODE_MAP = {
    'ConditionalCheckFailedException': (ConflictError, "Record already exists"),
    'ValidationException': (ValidationError, "Request rejected"),
    'ItemCollectionSizeLimitExceededException': (ValidationError, "Partition size limit exceeded"),
    'ResourceNotFoundException': (ConnectionError, "Table not found"),
    'UnrecognizedClientException': (ConnectionError, "Credentials rejected"),
    'AccessDeniedException': (ConnectionError, "Credentials rejected"),
    'InvalidEndpointException': (ConnectionError, "Invalid endpoint or signature"),
    'IncompleteSignatureException': (ConnectionError, "Invalid endpoint or signature"),
    'InvalidSignatureException': (ConnectionError, "Invalid endpoint or signature"),
    'ExpiredTokenException': (ConnectionError, "Credentials expired"),
    'TokenRefreshRequiredException': (ConnectionError, "Credentials expired"),
    'ProvisionedThroughputExceededException': (RetryableError, "Throttled"),
    'RequestLimitExceeded': (RetryableError, "Throttled"),
    'ThrottlingException': (RetryableError, "Throttled"),
    'TooManyRequestsException': (RetryableError, "Throttled"),
    'InternalServerError': (RetryableError, "Store unavailable"),
    'ServiceUnavailable': (RetryableError, "Store unavailable"),
    'ServiceUnavailableException': (RetryableError, "Store unavailable"),
    'InternalFailure': (RetryableError, "Store unavailable"),
    'RequestTimeoutException': (RetryableError, "Request timed out"),
    'RequestExpiredException': (RetryableError, "Request timed out"),
}


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> DataPointApiError:
    """Translate a botocore ClientError from Query, GetItem or PutItem.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed ("Query", "GetItem", "PutItem")
        table_name: The DynamoDB table name
        resource_id: Partition key or "PK/SK" of the record involved

    Returns:
        ConflictError, ValidationError, RetryableError or ConnectionError
        carrying ``error`` as its original error
    """
    error_code = error.response.get('Error', {}).get('Code', 'Unknown')
    error_message = error.response.get('Error', {}).get('Message', '')

    where = f"{operation} on {table_name}"
    if resource_id:
        where += f" (resource: {resource_id})"

    error_class, label = ERROR_CODE_MAP.get(error_code, (None, None))
    if error_class is None:
        logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
        error_class, label = ConnectionError, f"DynamoDB error {error_code}"

    message = f"{label} - {where}: {error_message}"
    if error_class is ConflictError:
        return ConflictError(message, resource_id, original_error=error)
    return error_class(message, original_error=error)


def _resource_id(key: Dict[str, Any]) -> Optional[str]:
    """Render a record key for error context, e.g. 'u1#d1/2024-01-01T00:00:00+00:00'."""
    partition = key.get('PK')
    if partition is None:
        return None
    sort = key.get('SK')
    return f"{partition}/{sort}" if sort is not None else str(partition)


class TableGateway:
    """
    Thin gateway for DynamoDB table operations.

    Designed to be used by the read API and the write pipeline rather than
    directly by clients. The boto3 resource is created on first use and
    reused for the lifetime of the gateway.
    """

    def __init__(self, config: DataPointConfig, table_name: str):
        """Initialize table gateway.

        Args:
            config: Data point configuration
            table_name: Name of the DynamoDB table
        """
        self.config = config
        self.table_name = table_name
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    region_name=self.config.region_name
                )

                dynamodb_config = {
                    'region_name': self.config.region_name
                }

                if self.config.endpoint_url:
                    dynamodb_config['endpoint_url'] = self.config.endpoint_url

                boto_config = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )
                dynamodb_config['config'] = boto_config

                self._dynamodb = session.resource('dynamodb', **dynamodb_config)
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    @property
    def table(self):
        """boto3 DynamoDB Table resource."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table

    def query(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB Query operation.

        Raw pass-through to boto3 with error mapping.

        Args:
            **kwargs: All boto3 query parameters

        Returns:
            Raw DynamoDB response

        Example:
            response = gateway.query(
                KeyConditionExpression='#PK = :PK AND #SK > :SK',
                ExpressionAttributeNames={'#PK': 'PK', '#SK': 'SK'},
                ExpressionAttributeValues={':PK': 'u1#d1', ':SK': '2024-01-01'},
                ScanIndexForward=True,
                Limit=100
            )
        """
        try:
            return self.table.query(**kwargs)
        except ClientError as e:
            partition = (kwargs.get('ExpressionAttributeValues') or {}).get(':PK')
            raise map_dynamodb_error(e, "Query", self.table_name, partition) from e

    def get_item(self, key: Dict[str, Any], consistent_read: bool = False) -> Optional[Dict[str, Any]]:
        """
        Get a single item by its primary key.

        Returns:
            The item, or None if it does not exist
        """
        try:
            response = self.table.get_item(Key=key, ConsistentRead=consistent_read)
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, _resource_id(key)) from e
        return response.get('Item')

    def put_item(self, item: Dict[str, Any], condition_expression=None) -> None:
        """
        Put item into DynamoDB table.

        Args:
            item: Item to store
            condition_expression: Optional condition for put operation

        Example:
            gateway.put_item(
                item={'PK': 'u1#d1', 'SK': '2024-01-01T00:00:00+00:00', 'value': 3},
                condition_expression=Attr('PK').not_exists()
            )
        """
        try:
            put_kwargs = {'Item': item}
            if condition_expression is not None:
                put_kwargs['ConditionExpression'] = condition_expression

            self.table.put_item(**put_kwargs)
            logger.info(f"Put item in {self.table_name}: {_resource_id(item)}")
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, _resource_id(item)) from e


def create_table_gateway(config: DataPointConfig, base_name: Optional[str] = None) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: Data point configuration
        base_name: Base table name used when the config carries no explicit
            table name

    Returns:
        Configured TableGateway instance
    """
    full_table_name = config.get_table_name(base_name) if base_name else config.get_table_name()
    return TableGateway(config, full_table_name)
