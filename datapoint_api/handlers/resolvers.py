"""
GraphQL Field Resolvers

Lambda-style entry points that route AppSync resolver events by
``info.fieldName``:

- listDataPoints  → DataPointsReadApi.list_by_partition
- createDataPoint → gated create pipeline (authorize, then write)

plus the standalone authorizer entry point returning ``{"allow": bool}``.

Event shape:
    {
        "arguments": {...},
        "identity": {"username": "...", "sub": "..."},
        "info": {"fieldName": "listDataPoints"}
    }
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from ..config import DataPointConfig
from ..models import ListDataPointsArguments
from ..utils import validate_input
from .authorization import AuthorizationGate, AuthorizationPolicy, EnvironmentFlagPolicy
from .data_points import DataPointsReadApi, DataPointsWriteApi, build_create_pipeline
from .pipeline import PipelineContext, PipelineExecutor

logger = logging.getLogger(__name__)

LIST_DATA_POINTS = "listDataPoints"
CREATE_DATA_POINT = "createDataPoint"


def _identity_owner(identity: Optional[Dict[str, Any]]) -> Optional[str]:
    """Owner to default to when a create request does not name one."""
    if not identity:
        return None
    return identity.get('username') or identity.get('sub')


class DataPointResolver:
    """Routes resolver events to the read API or the create pipeline."""

    def __init__(
        self,
        config: DataPointConfig,
        policy: Optional[AuthorizationPolicy] = None,
        read_api: Optional[DataPointsReadApi] = None,
        write_api: Optional[DataPointsWriteApi] = None
    ):
        self.config = config
        self.read_api = read_api or DataPointsReadApi(config)
        self.write_api = write_api or DataPointsWriteApi(config)
        self.gate = AuthorizationGate(policy or EnvironmentFlagPolicy(config))
        self.executor = PipelineExecutor()

    def resolve(self, event: Dict[str, Any]) -> Any:
        """
        Resolve one field.

        Returns:
            The field's result; None for unknown fields and for failed
            queries in lenient mode

        Raises:
            ValidationError: Invalid arguments
            UnauthorizedError: The create pipeline was denied
            WriteFailedError: The create pipeline could not write
        """
        field_name = (event.get('info') or {}).get('fieldName')
        arguments = event.get('arguments') or {}

        if field_name == LIST_DATA_POINTS:
            return self.list_data_points(arguments)
        if field_name == CREATE_DATA_POINT:
            return self.create_data_point(arguments, event.get('identity'), event.get('request'))

        logger.warning(f"No resolver for field '{field_name}'")
        return None

    def list_data_points(self, arguments: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        args = validate_input(ListDataPointsArguments, arguments)
        page = self.read_api.list_by_partition(
            owner=args.owner,
            name=args.name,
            range_filter=args.range_filter,
            limit=args.limit,
            next_token=args.next_token,
            sort_direction=args.sort_direction
        )
        return page.to_response() if page is not None else None

    def create_data_point(
        self,
        arguments: Dict[str, Any],
        identity: Optional[Dict[str, Any]] = None,
        request: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        data = dict(arguments.get('input') or arguments)
        if not data.get('owner'):
            owner = _identity_owner(identity)
            if owner:
                data['owner'] = owner

        context = PipelineContext(arguments=data, identity=identity, request=request)
        outcome = self.executor.run(build_create_pipeline(self.gate, self.write_api), context)
        return outcome.unwrap().to_response()


@lru_cache(maxsize=1)
def get_resolver() -> DataPointResolver:
    """Resolver built from the environment, shared across warm invocations."""
    config = DataPointConfig.from_env()
    config.configure_logging()
    return DataPointResolver(config)


def handler(event: Dict[str, Any], context: Any = None) -> Any:
    """Lambda entry point for the data point field resolvers."""
    logger.debug(f"request: {event}")
    return get_resolver().resolve(event)


def authorizer_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, bool]:
    """Lambda entry point for the standalone authorizer."""
    config = DataPointConfig.from_env()
    config.configure_logging()
    gate = AuthorizationGate(EnvironmentFlagPolicy(config))
    return gate.authorize(event).to_response()
