"""
Test configuration and fixtures for the data point API.

Provides configs, mocked gateways and a moto-backed data point table.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

# Add parent directory to path so we can import datapoint_api
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from datapoint_api import DataPointConfig

TEST_TABLE_NAME = "test_data_points"


def make_config(**overrides) -> DataPointConfig:
    """Build a config that ignores the caller's environment."""
    values = dict(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        table_name=TEST_TABLE_NAME,
        table_prefix="",
        environment="test",
        allow_mutations=False,
        error_mode="lenient",
        default_page_limit=100,
        enable_debug_logging=False,
    )
    values.update(overrides)
    return DataPointConfig(**values)


@pytest.fixture
def mock_config():
    """Lenient configuration with mutations denied."""
    return make_config()


@pytest.fixture
def strict_config():
    """Strict configuration: unknown filters and query failures raise."""
    return make_config(error_mode="strict")


@pytest.fixture
def allow_config():
    """Lenient configuration with the ALLOW flag set."""
    return make_config(allow_mutations=True)


@pytest.fixture
def mock_gateway():
    """Mock table gateway for handler tests."""
    gateway = Mock()
    gateway.table_name = TEST_TABLE_NAME
    gateway.query.return_value = {'Items': [], 'Count': 0, 'ScannedCount': 0}
    gateway.get_item.return_value = None
    gateway.put_item.return_value = None
    return gateway


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def data_points_table(mock_dynamodb_resource):
    """Create the data point table (PK/SK strings) for testing."""
    table = mock_dynamodb_resource.create_table(
        TableName=TEST_TABLE_NAME,
        KeySchema=[
            {'AttributeName': 'PK', 'KeyType': 'HASH'},
            {'AttributeName': 'SK', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'PK', 'AttributeType': 'S'},
            {'AttributeName': 'SK', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    return table


@pytest.fixture
def seeded_table(data_points_table):
    """Five records in partition u1#d1, one record in a neighbouring partition."""
    sort_keys = ["2023-12-31", "2024-01-01", "2024-01-15", "2024-01-31", "2024-02-01"]
    for index, sort_key in enumerate(sort_keys, start=1):
        data_points_table.put_item(Item={
            'PK': 'u1#d1',
            'SK': sort_key,
            'owner': 'u1',
            'name': 'd1',
            'createdAt': sort_key,
            'value': index,
        })
    data_points_table.put_item(Item={
        'PK': 'u1#d2',
        'SK': '2024-01-10',
        'owner': 'u1',
        'name': 'd2',
        'createdAt': '2024-01-10',
        'value': 99,
    })
    return data_points_table
