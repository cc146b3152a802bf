"""
Base Model Components and Mixins

DynamoDBMixin gives every stored model one canonical path into and out of
the boto3 resource layer:

- datetime → ISO string (sort keys are ISO timestamps)
- float → Decimal (the boto3 resource layer rejects floats)
- Decimal → preserved (boto3 maps it to the DynamoDB Number type)
- nested dicts/lists converted recursively

Payload attributes are opaque, so strings are never reinterpreted on the way
back in.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel

logger = logging.getLogger(__name__)


def _to_dynamodb_value(obj: Any) -> Any:
    """Recursively convert Python objects to DynamoDB-compatible types."""
    if isinstance(obj, dict):
        return {k: _to_dynamodb_value(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_to_dynamodb_value(list_item) for list_item in obj]
    elif isinstance(obj, datetime):
        return obj.isoformat()
    elif isinstance(obj, bool):
        return obj
    elif isinstance(obj, float):
        # str() first so 0.1 becomes Decimal('0.1'), not its binary expansion
        return Decimal(str(obj))
    else:
        return obj


class DynamoDBMixin(BaseModel):
    """
    Mixin providing DynamoDB serialization and deserialization functionality.

    Fields declared with aliases (``PK``, ``SK``, ``createdAt``) are written
    under their alias; undeclared payload attributes pass through untouched.
    """

    def to_dynamodb_item(self) -> Dict[str, Any]:
        """
        Convert model to DynamoDB-compatible item.

        Returns:
            DynamoDB-compatible dictionary ready for storage

        Example:
            item = data_point.to_dynamodb_item()
            gateway.put_item(item)
        """
        dumped_item = self.model_dump(by_alias=True, exclude_none=True)
        return _to_dynamodb_value(dumped_item)

    @classmethod
    def from_dynamodb_item(cls, item: Dict[str, Any]):
        """
        Create model instance from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Model instance

        Raises:
            ValidationError: If item data is invalid for the model
        """
        try:
            return cls.model_validate(item)
        except Exception as e:
            logger.error(f"Failed to convert DynamoDB item to {cls.__name__}: {e}")
            from ..exceptions import ValidationError
            raise ValidationError(f"Failed to convert DynamoDB item to {cls.__name__}: {e}", original_error=e) from e
