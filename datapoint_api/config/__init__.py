from .config import (
    DEFAULT_TABLE_BASE_NAME,
    ERROR_MODE_LENIENT,
    ERROR_MODE_STRICT,
    DataPointConfig,
)

__all__ = [
    "DEFAULT_TABLE_BASE_NAME",
    "ERROR_MODE_LENIENT",
    "ERROR_MODE_STRICT",
    "DataPointConfig",
]
