"""Policy loading, types and evaluation."""

from trackplan.policy.evaluator import PlanningError, evaluate_policy
from trackplan.policy.exceptions import PolicyError, PolicyValidationError
from trackplan.policy.loader import load_policy, load_policy_from_dict

__all__ = [
    "PlanningError",
    "PolicyError",
    "PolicyValidationError",
    "evaluate_policy",
    "load_policy",
    "load_policy_from_dict",
]
