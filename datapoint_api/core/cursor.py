"""
Pagination Cursor Codec

A cursor is the store's LastEvaluatedKey in DynamoDB-JSON form
(``{"PK": {"S": "u1#d1"}, "n": {"N": "7"}}``), dumped as canonical JSON and
wrapped in URL-safe base64. Numbers keep their exact decimal text and Binary
values travel as base64 strings, so every key type round-trips unchanged.
Callers treat the cursor as an opaque string and hand it back as is.

Decoding fails soft: a token that cannot be decoded is logged and treated as
"no cursor", so a corrupt or foreign token yields the first page instead of
an error.
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional

from boto3.dynamodb.types import Binary, TypeDeserializer, TypeSerializer

from ..exceptions import MalformedCursorError

logger = logging.getLogger(__name__)

BINARY_TYPE = 'B'


def _json_default(obj: Any) -> Any:
    """Serialize Binary key values, which TypeSerializer leaves as bytes."""
    if isinstance(obj, Binary):
        obj = obj.value
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode('ascii')
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class CursorCodec:
    """Encodes last-evaluated keys into opaque tokens and back."""

    def __init__(self):
        self.serializer = TypeSerializer()
        self.deserializer = TypeDeserializer()

    def encode(self, last_key: Optional[Dict[str, Any]]) -> Optional[str]:
        """
        Encode a last-evaluated key as a continuation token.

        Args:
            last_key: LastEvaluatedKey from a query response

        Returns:
            URL-safe token, or None when there is no further page
        """
        if not last_key:
            return None

        wire = {name: self.serializer.serialize(value) for name, value in last_key.items()}
        canonical = json.dumps(wire, sort_keys=True, separators=(',', ':'), default=_json_default)
        return base64.urlsafe_b64encode(canonical.encode('utf-8')).decode('ascii')

    def _deserialize(self, name: str, typed: Any) -> Any:
        if not isinstance(typed, dict) or len(typed) != 1:
            raise ValueError(f"attribute '{name}' is not a typed value")
        type_code, value = next(iter(typed.items()))
        if type_code == BINARY_TYPE:
            if not isinstance(value, str):
                raise ValueError(f"attribute '{name}' has a non-string binary value")
            typed = {BINARY_TYPE: base64.b64decode(value.encode('ascii'), validate=True)}
        return self.deserializer.deserialize(typed)

    def decode_or_raise(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Decode a continuation token.

        Args:
            token: Token produced by encode, or None

        Returns:
            The last-evaluated key, or None when no token was given

        Raises:
            MalformedCursorError: If the token is not a valid cursor
        """
        if token is None:
            return None
        if not isinstance(token, str) or not token:
            raise MalformedCursorError("Cursor must be a non-empty string", token=token if isinstance(token, str) else None)

        try:
            raw = base64.b64decode(token.encode('ascii'), altchars=b'-_', validate=True)
            wire = json.loads(raw.decode('utf-8'))
            if not isinstance(wire, dict) or not wire:
                raise ValueError("cursor does not contain a key object")
            return {name: self._deserialize(name, typed) for name, typed in wire.items()}
        except (UnicodeError, binascii.Error, ValueError, TypeError, AttributeError, ArithmeticError, RecursionError) as e:
            raise MalformedCursorError(f"Cursor could not be decoded: {e}", token=token, original_error=e) from e

    def decode(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Decode a continuation token, treating malformed tokens as absent.

        Never raises.

        Returns:
            The last-evaluated key, or None for a missing or malformed token
        """
        try:
            return self.decode_or_raise(token)
        except MalformedCursorError as e:
            logger.warning(f"Could not parse nextToken, falling back to first page: {e}")
            return None
