"""Policy evaluation entry point."""

from __future__ import annotations

import logging

from trackplan.domain import ProbeResult
from trackplan.policy.evaluator.plan_builder import build_plan
from trackplan.policy.types import Plan, PolicySchema

logger = logging.getLogger(__name__)


def evaluate_policy(
    policy: PolicySchema,
    probe_result: ProbeResult,
    keep_optional: bool = True,
) -> Plan:
    """Evaluate a policy against a probed file.

    This is a pure function: the same policy and probe result always
    produce the same plan.

    Args:
        policy: Validated policy.
        probe_result: Stream catalog and container format of the file.
        keep_optional: If False, optional-keep streams are dropped.

    Returns:
        Immutable Plan.

    Raises:
        PlanningError: If the policy cannot be satisfied for this file.
    """
    logger.debug(
        "Evaluating policy for %s (%d streams)",
        probe_result.file_path,
        len(probe_result.streams),
    )
    return build_plan(
        probe_result.streams,
        policy.capabilities,
        policy.ordered_requirements,
        output_format=policy.output_format,
        source_format=probe_result.extension or None,
        keep_optional=keep_optional,
    )
