"""
Tests for DynamoDB error mapping.

Every botocore error code the gateway can see must come out as a domain
exception that keeps the original error and the operation context.
"""

import pytest
from botocore.exceptions import ClientError

from datapoint_api.core.table_gateway import map_dynamodb_error
from datapoint_api.exceptions import (
    ConflictError,
    ConnectionError,
    DataPointApiError,
    RetryableError,
    ValidationError,
)


def create_client_error(error_code: str, message: str = "Test error") -> ClientError:
    """Helper to create ClientError for testing."""
    return ClientError(
        error_response={
            'Error': {
                'Code': error_code,
                'Message': message
            }
        },
        operation_name='TestOperation'
    )


class TestConditionalAndConflictErrors:
    """Test mapping of conditional check and conflict errors."""

    def test_conditional_check_failed(self):
        """Test ConditionalCheckFailedException mapping."""
        error = create_client_error('ConditionalCheckFailedException', 'The conditional request failed')

        result = map_dynamodb_error(error, 'PutItem', 'test_table', 'u1#d1/a')

        assert isinstance(result, ConflictError)
        assert 'u1#d1/a' in str(result)
        assert 'conditional request failed' in str(result).lower()
        assert result.original_error == error

    def test_transaction_conflict_is_not_a_conflict(self):
        """Test transaction codes fall through to the unknown-code default."""
        error = create_client_error('TransactionConflictException', 'Transaction conflict detected')

        result = map_dynamodb_error(error, 'PutItem', 'test_table', 'u1#d1/a')

        assert isinstance(result, ConnectionError)
        assert not isinstance(result, ConflictError)


class TestMappedCategories:
    """Test each error code lands in its category."""

    @pytest.mark.parametrize("code", [
        'ResourceNotFoundException',
        'UnrecognizedClientException',
        'AccessDeniedException',
        'InvalidEndpointException',
        'IncompleteSignatureException',
        'InvalidSignatureException',
        'ExpiredTokenException',
        'TokenRefreshRequiredException',
    ])
    def test_connection_errors(self, code):
        """Test access and endpoint problems map to ConnectionError."""
        assert isinstance(map_dynamodb_error(create_client_error(code), 'Query', 'test_table'), ConnectionError)

    @pytest.mark.parametrize("code", ['ValidationException', 'ItemCollectionSizeLimitExceededException'])
    def test_validation_errors(self, code):
        """Test request validation failures map to ValidationError."""
        assert isinstance(map_dynamodb_error(create_client_error(code), 'Query', 'test_table'), ValidationError)

    @pytest.mark.parametrize("code", [
        'ProvisionedThroughputExceededException',
        'RequestLimitExceeded',
        'ThrottlingException',
        'TooManyRequestsException',
        'InternalServerError',
        'ServiceUnavailable',
        'ServiceUnavailableException',
        'InternalFailure',
        'RequestTimeoutException',
        'RequestExpiredException',
    ])
    def test_retryable_errors(self, code):
        """Test temporary failures map to RetryableError."""
        assert isinstance(map_dynamodb_error(create_client_error(code), 'Query', 'test_table'), RetryableError)

    def test_unknown_code_defaults_to_connection_error(self):
        """Test unknown error codes map to ConnectionError."""
        error = create_client_error('SomethingNewException', 'Surprise')

        result = map_dynamodb_error(error, 'Query', 'test_table')

        assert isinstance(result, ConnectionError)
        assert 'Surprise' in str(result)


class TestErrorContext:
    """Test the context carried by mapped errors."""

    def test_operation_and_table_in_message(self):
        """Test the message names the operation and the table."""
        result = map_dynamodb_error(create_client_error('ValidationException', 'Bad key'), 'Query', 'data_points')

        assert 'Query on data_points' in str(result)
        assert 'Bad key' in str(result)

    def test_all_results_are_domain_errors(self):
        """Test callers can catch everything with the base class."""
        for code in ['ConditionalCheckFailedException', 'ValidationException', 'ThrottlingException', 'Nope']:
            assert isinstance(map_dynamodb_error(create_client_error(code), 'Query', 't'), DataPointApiError)

    def test_repr_includes_original_error(self):
        """Test repr exposes the wrapped botocore error."""
        error = create_client_error('ThrottlingException')

        result = map_dynamodb_error(error, 'Query', 'test_table')

        assert 'ClientError' in repr(result)

    def test_response_without_error_code(self):
        """Test a response missing its Error block still maps."""
        error = ClientError(error_response={}, operation_name='Query')

        result = map_dynamodb_error(error, 'Query', 'test_table')

        assert isinstance(result, ConnectionError)
        assert result.original_error is error
