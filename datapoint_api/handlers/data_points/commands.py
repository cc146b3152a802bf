"""
Data Points Write API

Creates single data points with a conditional PutItem (the key must not
already exist) and exposes that write as the mutation step of the gated
create pipeline:

    [AuthorizationStep(gate), CreateDataPointStep(write_api)]

Write failures are never hidden: the write API raises mapped domain errors
and the pipeline step turns them into a FAILED outcome carrying
WriteFailedError.
"""

import logging
from typing import Any, Dict, List, Union

from boto3.dynamodb.conditions import Attr

from ...config import DataPointConfig
from ...core import create_table_gateway
from ...exceptions import DataPointApiError, ValidationError, WriteFailedError
from ...models import DataPoint, DataPointCreate, build_partition_key
from ...utils import item_to_model, model_to_item, validate_input
from ..authorization import AuthorizationGate, AuthorizationStep
from ..pipeline import PipelineContext, PipelineStep, StepOutcome

logger = logging.getLogger(__name__)


def validate_create_input(data: Union[DataPointCreate, Dict[str, Any]]) -> DataPointCreate:
    """Validate create input into a DataPointCreate."""
    return validate_input(DataPointCreate, data)


class DataPointsWriteApi:
    """
    Write-only API for data point mutations.

    Every write is a single PutItem with the store's native atomicity; there
    are no retries, transactions or multi-record writes.
    """

    def __init__(self, config: DataPointConfig):
        """Initialize write API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config, DataPoint.Meta.table_name)

    def create_data_point(
        self,
        data: Union[DataPointCreate, Dict[str, Any]],
        condition_expression=None
    ) -> DataPoint:
        """
        Create a new data point.

        DynamoDB Operation: PutItem with ConditionExpression
        Default Condition: neither PK nor SK exists (no overwrite)

        Args:
            data: DataPointCreate or its wire shape
            condition_expression: Custom condition (defaults to prevent overwrites)

        Returns:
            The persisted DataPoint

        Raises:
            ValidationError: Invalid input
            ConflictError: A record with the same key exists
            ConnectionError: Store unreachable or refusing the caller

        Examples:
            >>> api.create_data_point({"owner": "u1", "name": "d1", "value": 21.5})
        """
        data_point = validate_create_input(data).to_data_point()
        item = model_to_item(data_point)

        if condition_expression is None:
            condition_expression = Attr(DataPoint.Meta.partition_key).not_exists() & \
                Attr(DataPoint.Meta.sort_key).not_exists()

        self.gateway.put_item(item, condition_expression=condition_expression)
        logger.info(f"Created data point: {data_point.partition_key} at {data_point.sort_key}")
        return item_to_model(item, DataPoint)


class CreateDataPointStep(PipelineStep):
    """Mutation step: writes exactly one data point from the context arguments."""

    name = "createDataPoint"

    def __init__(self, write_api: DataPointsWriteApi):
        self.write_api = write_api

    def execute(self, context: PipelineContext) -> StepOutcome:
        try:
            data = validate_create_input(context.arguments)
        except ValidationError as e:
            return StepOutcome.fail(e)

        try:
            record = self.write_api.create_data_point(data)
        except DataPointApiError as e:
            resource_id = build_partition_key(data.owner, data.name)
            return StepOutcome.fail(WriteFailedError(f"Failed to create data point: {e}", resource_id, original_error=e))

        context.put('dataPoint', record)
        return StepOutcome.proceed(record)


def build_create_pipeline(gate: AuthorizationGate, write_api: DataPointsWriteApi) -> List[PipelineStep]:
    """Steps of the gated createDataPoint mutation, in execution order."""
    return [AuthorizationStep(gate), CreateDataPointStep(write_api)]
