"""Policy evaluation.

The engine is a pure function of (requirements, catalog, capabilities):
it either returns an immutable Plan or raises PlanningError listing every
failure it found.
"""

from trackplan.policy.evaluator.capability import resolve_stream_action
from trackplan.policy.evaluator.evaluate import evaluate_policy
from trackplan.policy.evaluator.exceptions import (
    EvaluationError,
    NoCompatibleCodecError,
    PlanningError,
)
from trackplan.policy.evaluator.levels import LevelOutcome, evaluate_level
from trackplan.policy.evaluator.matching import RequirementMatch, match_requirements
from trackplan.policy.evaluator.plan_builder import build_plan

__all__ = [
    "EvaluationError",
    "LevelOutcome",
    "NoCompatibleCodecError",
    "PlanningError",
    "RequirementMatch",
    "build_plan",
    "evaluate_level",
    "evaluate_policy",
    "match_requirements",
    "resolve_stream_action",
]
