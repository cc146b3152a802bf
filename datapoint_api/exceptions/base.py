from typing import Any, Dict, Optional


class DataPointApiError(Exception):
    """Root of every error raised by the query API, the gateway and the write pipeline.

    Pipeline steps that raise a subclass are turned into FAILED outcomes, and
    lenient reads catch it to report "no result". Anything else escaping the
    package is a programming error.

    Attributes:
        message: What went wrong, without the context suffix
        original_error: The botocore, pydantic or decoding error underneath, if any
        context: Identifiers for log correlation (partition key, resource id, step)
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Message followed by the context, e.g. ``... (Context: partition_key=u1#d1)``."""
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, original_error={self.original_error!r}, context={self.context!r})"
