"""
Authorization Gate

The gate asks an injected AuthorizationPolicy whether an invocation may
proceed and normalizes the answer into AuthorizationDecision(allow=bool).
It keeps no state between calls; every invocation gets a fresh decision.

Policies:
- EnvironmentFlagPolicy: one process-wide flag (env ALLOW == "true")
- StaticPolicy: a fixed decision, for tests and local development

Real claim-based policies implement AuthorizationPolicy.evaluate and plug
into the same gate.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

from ..config import DataPointConfig
from .pipeline import PipelineContext, PipelineStep, StepOutcome

logger = logging.getLogger(__name__)


class AuthorizationDecision(BaseModel):
    """Allow/deny answer for one invocation."""

    allow: bool

    model_config = ConfigDict(frozen=True)

    def to_response(self) -> dict:
        return {'allow': self.allow}


class AuthorizationPolicy(ABC):
    """Source of allow/deny signals."""

    @abstractmethod
    def evaluate(self, context: Any) -> Any:
        """Return a bool, a ``{"allow": ...}`` mapping or an AuthorizationDecision."""


class EnvironmentFlagPolicy(AuthorizationPolicy):
    """Allows every invocation iff the configured ALLOW flag is set."""

    def __init__(self, config: DataPointConfig):
        self.config = config

    def evaluate(self, context: Any) -> bool:
        return self.config.allow_mutations


class StaticPolicy(AuthorizationPolicy):
    """Always returns the same decision."""

    def __init__(self, allow: bool):
        self.allow = allow

    def evaluate(self, context: Any) -> bool:
        return self.allow


def normalize_decision(signal: Any) -> AuthorizationDecision:
    """
    Coerce a policy signal into an AuthorizationDecision.

    Strings count as allow only when they read "true"; mappings are read
    through their "allow" key; a missing signal denies.
    """
    if isinstance(signal, AuthorizationDecision):
        return signal
    if isinstance(signal, Mapping):
        return normalize_decision(signal.get('allow'))
    if isinstance(signal, str):
        return AuthorizationDecision(allow=signal.strip().lower() == 'true')
    return AuthorizationDecision(allow=bool(signal))


class AuthorizationGate:
    """Evaluates a request against the injected policy."""

    def __init__(self, policy: AuthorizationPolicy):
        self.policy = policy

    def authorize(self, context: Any) -> AuthorizationDecision:
        """
        Decide whether the invocation described by ``context`` may proceed.

        Args:
            context: PipelineContext or a raw invocation event

        Returns:
            AuthorizationDecision
        """
        if isinstance(context, PipelineContext):
            logger.debug(f"Authorization request: {context.to_dict()}")
        else:
            logger.debug(f"Authorization request: {context}")

        decision = normalize_decision(self.policy.evaluate(context))
        logger.info(f"Authorization decision from {type(self.policy).__name__}: allow={decision.allow}")
        return decision


class AuthorizationStep(PipelineStep):
    """Pipeline step that stops the pipeline when the gate denies."""

    name = "authorize"

    def __init__(self, gate: AuthorizationGate):
        self.gate = gate

    def execute(self, context: PipelineContext) -> StepOutcome:
        decision = self.gate.authorize(context)
        context.put('authorization', decision)
        if not decision.allow:
            return StepOutcome.deny("Not authorized to perform this operation")
        return StepOutcome.proceed()
