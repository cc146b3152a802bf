"""
Handler Layer for the Data Point API

- data_points/: read API (partition queries) and write API (creates)
- authorization.py: allow/deny gate over an injected policy
- pipeline.py: ordered step execution with short-circuit on deny/fail
- resolvers.py: field resolver entry points

Architecture:
handlers/ (this layer) -> core/ (gateway, expressions, cursors) -> DynamoDB
handlers/ (this layer) <- models/ (domain models, views, DTOs)
"""

from .pipeline import (
    OutcomeKind,
    PipelineContext,
    PipelineExecutor,
    PipelineOutcome,
    PipelineStatus,
    PipelineStep,
    StepOutcome,
)
from .authorization import (
    AuthorizationDecision,
    AuthorizationGate,
    AuthorizationPolicy,
    AuthorizationStep,
    EnvironmentFlagPolicy,
    StaticPolicy,
)
from .data_points import (
    CreateDataPointStep,
    DataPointsReadApi,
    DataPointsWriteApi,
    build_create_pipeline,
)
from .resolvers import DataPointResolver

__all__ = [
    # Pipeline
    'OutcomeKind',
    'PipelineContext',
    'PipelineExecutor',
    'PipelineOutcome',
    'PipelineStatus',
    'PipelineStep',
    'StepOutcome',

    # Authorization
    'AuthorizationDecision',
    'AuthorizationGate',
    'AuthorizationPolicy',
    'AuthorizationStep',
    'EnvironmentFlagPolicy',
    'StaticPolicy',

    # Data points
    'CreateDataPointStep',
    'DataPointsReadApi',
    'DataPointsWriteApi',
    'build_create_pipeline',

    # Resolvers
    'DataPointResolver',
]
