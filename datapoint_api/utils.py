"""
Data Point API Utilities

- Timestamp normalization (sort keys are stored as UTC ISO strings)
- Item/model conversion at the gateway boundary
- Key building from a model's Meta class
- Input validation with pydantic errors mapped to ValidationError
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# Timestamp Utilities
# =============================================================================

def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC.

    Naive datetimes are assumed to already be in UTC.

    Args:
        dt: Datetime to convert to UTC

    Returns:
        Datetime in UTC timezone, or None if input is None

    Examples:
        >>> to_utc(datetime(2024, 1, 1, 10, 0))
        datetime.datetime(2024, 1, 1, 10, 0, tzinfo=datetime.timezone.utc)
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


# =============================================================================
# Item / Model Conversion
# =============================================================================

def item_to_model(item: Dict[str, Any], model_class: Type[BaseModel]) -> BaseModel:
    """Convert a DynamoDB item to a model instance.

    Uses the model's ``from_dynamodb_item`` when it has one.

    Raises:
        ValidationError: If the item does not fit the model
    """
    if hasattr(model_class, 'from_dynamodb_item'):
        return model_class.from_dynamodb_item(item)

    try:
        return model_class.model_validate(item)
    except Exception as e:
        logger.error(f"Failed to convert item to {model_class.__name__}: {e}")
        raise ValidationError(f"Failed to convert item to {model_class.__name__}: {e}", original_error=e) from e


def model_to_item(model: BaseModel) -> Dict[str, Any]:
    """Convert a model instance to a DynamoDB item."""
    if hasattr(model, 'to_dynamodb_item'):
        return model.to_dynamodb_item()
    return model.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Key Building (Meta Class Based)
# =============================================================================

def extract_model_metadata(model_class: Type[BaseModel]) -> Dict[str, Any]:
    """Extract key metadata from a model's Meta class.

    Raises:
        ValueError: If the model has no Meta class or no partition key
    """
    if not hasattr(model_class, 'Meta'):
        raise ValueError(f"Model {model_class.__name__} must have a Meta class with partition_key and sort_key attributes")

    meta = model_class.Meta
    partition_key = getattr(meta, 'partition_key', None)
    sort_key = getattr(meta, 'sort_key', None)

    if not partition_key:
        raise ValueError(f"Model {model_class.__name__}.Meta must define partition_key")

    return {
        'partition_key': partition_key,
        'sort_key': sort_key,
        'primary_key_fields': meta.get_key_fields(),
    }


def build_model_key(model_class: Type[BaseModel], **key_values: Any) -> Dict[str, Any]:
    """Build a DynamoDB key from the model's Meta class.

    Examples:
        >>> build_model_key(DataPoint, PK="u1#d1", SK="2024-01-01T00:00:00+00:00")
        {'PK': 'u1#d1', 'SK': '2024-01-01T00:00:00+00:00'}

    Raises:
        ValueError: If a key attribute is missing
    """
    metadata = extract_model_metadata(model_class)
    key = {}

    for field in metadata['primary_key_fields']:
        if field not in key_values:
            raise ValueError(f"Missing key attribute '{field}' for {model_class.__name__}")
        key[field] = key_values[field]

    return key


# =============================================================================
# Input Validation
# =============================================================================

def validate_input(model_class: Type[BaseModel], data: Any) -> BaseModel:
    """Validate resolver input into ``model_class``.

    Raises:
        ValidationError: Carrying pydantic's field errors keyed by location
    """
    if isinstance(data, model_class):
        return data
    try:
        return model_class.model_validate(data)
    except PydanticValidationError as e:
        errors = {'.'.join(str(p) for p in err['loc']) or '__root__': err['msg'] for err in e.errors()}
        raise ValidationError(f"Invalid {model_class.__name__}: {e.error_count()} error(s)", errors=errors, original_error=e) from e
