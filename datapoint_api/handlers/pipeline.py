"""
Gated Write Pipeline

A pipeline is an ordered list of steps executed for one logical operation.
Each step returns a StepOutcome:

- CONTINUE: go on to the next step (optionally carrying a result)
- DENY: stop; the pipeline is DENIED and carries an UnauthorizedError
- FAIL: stop; the pipeline is FAILED and carries the step's error

The executor is a plain reducer over the steps. Nothing is retried and no
step runs before the previous one has returned. Steps share a
PipelineContext whose stash is append-only.

    outcome = PipelineExecutor().run(
        [AuthorizationStep(gate), CreateDataPointStep(write_api)],
        PipelineContext(arguments={"owner": "u1", "name": "d1", "value": 3}),
    )
    record = outcome.unwrap()
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..exceptions import DataPointApiError, UnauthorizedError

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    """What a step tells the executor to do next."""
    CONTINUE = "CONTINUE"
    DENY = "DENY"
    FAIL = "FAIL"


@dataclass(frozen=True)
class StepOutcome:
    """Result of executing one pipeline step."""

    kind: OutcomeKind
    result: Any = None
    error: Optional[Exception] = None
    reason: Optional[str] = None

    @classmethod
    def proceed(cls, result: Any = None) -> 'StepOutcome':
        return cls(OutcomeKind.CONTINUE, result=result)

    @classmethod
    def deny(cls, reason: Optional[str] = None) -> 'StepOutcome':
        return cls(OutcomeKind.DENY, reason=reason)

    @classmethod
    def fail(cls, error: Exception) -> 'StepOutcome':
        return cls(OutcomeKind.FAIL, error=error)


class PipelineContext:
    """
    State shared by the steps of one pipeline invocation.

    ``arguments``, ``identity`` and ``request`` describe the invocation and
    are read-only by convention. Steps add their own data with put(); a key
    can be written once.
    """

    def __init__(
        self,
        arguments: Optional[Mapping[str, Any]] = None,
        identity: Optional[Mapping[str, Any]] = None,
        request: Optional[Mapping[str, Any]] = None
    ):
        self.arguments: Dict[str, Any] = dict(arguments or {})
        self.identity: Dict[str, Any] = dict(identity or {})
        self.request: Dict[str, Any] = dict(request or {})
        self._stash: Dict[str, Any] = {}

    def put(self, key: str, value: Any) -> None:
        """Add a value to the stash.

        Raises:
            KeyError: If the key was already written by an earlier step
        """
        if key in self._stash:
            raise KeyError(f"Pipeline context key '{key}' is already set")
        self._stash[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._stash.get(key, default)

    @property
    def stash(self) -> Mapping[str, Any]:
        return MappingProxyType(self._stash)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view for logging and for policies that expect an event."""
        return {
            'arguments': self.arguments,
            'identity': self.identity,
            'request': self.request,
        }


class PipelineStep(ABC):
    """One named unit of work in a pipeline."""

    name: str = "step"

    @abstractmethod
    def execute(self, context: PipelineContext) -> StepOutcome:
        """Run the step against the shared context."""


class PipelineStatus(str, Enum):
    """Terminal state of a pipeline run."""
    COMPLETED = "COMPLETED"
    DENIED = "DENIED"
    FAILED = "FAILED"


@dataclass
class PipelineOutcome:
    """Overall result of a pipeline run."""

    status: PipelineStatus
    result: Any = None
    error: Optional[Exception] = None
    executed_steps: List[str] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.status == PipelineStatus.COMPLETED

    @property
    def denied(self) -> bool:
        return self.status == PipelineStatus.DENIED

    @property
    def failed(self) -> bool:
        return self.status == PipelineStatus.FAILED

    def unwrap(self) -> Any:
        """
        Return the pipeline result or raise the error that stopped it.

        Raises:
            UnauthorizedError: The pipeline was denied
            DataPointApiError: The error carried by a failed step
        """
        if self.error is not None:
            raise self.error
        return self.result


class PipelineExecutor:
    """Runs pipeline steps strictly in order, stopping at the first DENY or FAIL."""

    def run(self, steps: Sequence[PipelineStep], context: PipelineContext) -> PipelineOutcome:
        """
        Execute ``steps`` against ``context``.

        A step raising DataPointApiError counts as FAIL. Other exceptions are
        programming errors and propagate.

        Returns:
            PipelineOutcome; on completion its result is the last non-None
            step result
        """
        executed: List[str] = []
        result = None

        for step in steps:
            logger.debug(f"Executing pipeline step '{step.name}'")
            try:
                outcome = step.execute(context)
            except DataPointApiError as e:
                logger.error(f"Pipeline step '{step.name}' raised: {e}")
                outcome = StepOutcome.fail(e)
            executed.append(step.name)

            if outcome.kind == OutcomeKind.DENY:
                logger.warning(f"Pipeline denied at step '{step.name}': {outcome.reason or 'no reason given'}")
                error = UnauthorizedError(outcome.reason or "Not authorized to perform this operation", step=step.name)
                return PipelineOutcome(PipelineStatus.DENIED, error=error, executed_steps=executed)

            if outcome.kind == OutcomeKind.FAIL:
                logger.error(f"Pipeline failed at step '{step.name}': {outcome.error}")
                return PipelineOutcome(PipelineStatus.FAILED, error=outcome.error, executed_steps=executed)

            if outcome.result is not None:
                result = outcome.result

        return PipelineOutcome(PipelineStatus.COMPLETED, result=result, executed_steps=executed)
