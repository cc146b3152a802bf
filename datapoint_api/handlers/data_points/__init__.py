"""
Data Points CQRS APIs

Read API:
- Paginated range queries over one owner#name partition
- Opaque continuation tokens
- Lenient or strict handling of store failures

Write API:
- Conditional single-record creates
- The mutation step of the gated create pipeline

Usage:
    from .queries import DataPointsReadApi
    from .commands import DataPointsWriteApi

    read_api = DataPointsReadApi(config)
    write_api = DataPointsWriteApi(config)
"""

from .queries import DataPointsReadApi
from .commands import CreateDataPointStep, DataPointsWriteApi, build_create_pipeline

__all__ = [
    "DataPointsReadApi",
    "DataPointsWriteApi",
    "CreateDataPointStep",
    "build_create_pipeline",
]
