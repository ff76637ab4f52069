"""Policy type definitions.

Re-exports the public types so callers can write
``from trackplan.policy.types import Plan, Requirement``.
"""

from trackplan.policy.types.capabilities import CapabilitySet
from trackplan.policy.types.enums import (
    ActionKind,
    Disposition,
    RequirementOrder,
    SatisfactionLevel,
)
from trackplan.policy.types.failures import (
    NoCompatibleCodec,
    PlanFailure,
    RequirementUnsatisfied,
)
from trackplan.policy.types.plan import Plan, PlannedStream, StreamAction
from trackplan.policy.types.requirements import (
    Requirement,
    RequirementSet,
    default_level,
    order_requirements,
)
from trackplan.policy.types.schema import PolicySchema

__all__ = [
    # Enums
    "ActionKind",
    "Disposition",
    "RequirementOrder",
    "SatisfactionLevel",
    # Configuration
    "CapabilitySet",
    "PolicySchema",
    "Requirement",
    "RequirementSet",
    "default_level",
    "order_requirements",
    # Plan
    "Plan",
    "PlannedStream",
    "StreamAction",
    # Failures
    "NoCompatibleCodec",
    "PlanFailure",
    "RequirementUnsatisfied",
]
