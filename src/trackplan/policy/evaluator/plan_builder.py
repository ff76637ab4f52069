"""Plan assembly.

Combines matching, level evaluation and capability resolution into a
single immutable Plan. Failures are collected across the whole run and
raised together; a partial plan is never returned.
"""

from __future__ import annotations

import logging

from trackplan.domain import MediaStream
from trackplan.policy.evaluator.capability import resolve_stream_action
from trackplan.policy.evaluator.exceptions import (
    NoCompatibleCodecError,
    PlanningError,
)
from trackplan.policy.evaluator.levels import evaluate_level
from trackplan.policy.evaluator.matching import match_requirements
from trackplan.policy.types import (
    CapabilitySet,
    Disposition,
    Plan,
    PlanFailure,
    PlannedStream,
    Requirement,
    StreamAction,
)

logger = logging.getLogger(__name__)


def _select_output_format(
    capabilities: CapabilitySet, output_format: str | None
) -> str:
    if output_format is None:
        return capabilities.default_format
    fmt = output_format.strip().lstrip(".").casefold()
    if not capabilities.supports_format(fmt):
        raise ValueError(
            f"output_format '{output_format}' is not a supported format"
        )
    return fmt


def _plan_kept_stream(
    stream: MediaStream,
    disposition: Disposition,
    requirement: Requirement,
    capabilities: CapabilitySet,
    failures: list[PlanFailure],
) -> PlannedStream | None:
    """Resolve the action for a must-keep or optional-keep stream.

    Returns None when a must-keep stream has no compatible codec; the
    failure is appended to ``failures``.
    """
    try:
        action = resolve_stream_action(stream, capabilities)
    except NoCompatibleCodecError as e:
        if disposition == Disposition.MUST_KEEP:
            failures.append(e.failure)
            return None
        logger.warning(
            "Dropping optional stream %s: no compatible codec", stream.label
        )
        return PlannedStream(
            stream=stream,
            action=StreamAction.drop(),
            disposition=disposition,
            requirement=requirement,
            reason=f"no compatible {stream.stream_type.value} codec",
        )

    if action.target_codec:
        reason = (
            f"{requirement.description}: codec '{stream.codec}' not supported, "
            f"transcode to {action.target_codec}"
        )
    else:
        reason = f"{requirement.description}: codec supported"
    return PlannedStream(
        stream=stream,
        action=action,
        disposition=disposition,
        requirement=requirement,
        reason=reason,
    )


def build_plan(
    streams: tuple[MediaStream, ...] | list[MediaStream],
    capabilities: CapabilitySet,
    requirements: tuple[Requirement, ...] | list[Requirement],
    output_format: str | None = None,
    source_format: str | None = None,
    keep_optional: bool = True,
) -> Plan:
    """Build a per-stream plan for one catalog.

    Args:
        streams: Stream catalog of the input file.
        capabilities: Allowed formats and codecs.
        requirements: Requirements in claim order.
        output_format: Explicit output format, or None for the first
            supported format.
        source_format: Container format of the input file, if known.
        keep_optional: If False, optional-keep streams are dropped.

    Returns:
        Plan with one entry per input stream, in index order.

    Raises:
        PlanningError: If any requirement is unsatisfied or any must-keep
            stream has no compatible codec. Lists every failure.
        ValueError: If output_format is not a supported format.
    """
    target_format = _select_output_format(capabilities, output_format)
    ordered_streams = sorted(streams, key=lambda s: s.index)

    failures: list[PlanFailure] = []
    claims: dict[int, tuple[Requirement, Disposition]] = {}

    for match in match_requirements(requirements, ordered_streams):
        outcome = evaluate_level(match)
        if outcome.failure is not None:
            failures.append(outcome.failure)
            continue
        for index, disposition in outcome.dispositions.items():
            claims[index] = (match.requirement, disposition)

    planned: list[PlannedStream] = []
    for stream in ordered_streams:
        claim = claims.get(stream.index)
        if claim is None:
            planned.append(
                PlannedStream(
                    stream=stream,
                    action=StreamAction.drop(),
                    disposition=Disposition.UNCLAIMED,
                    requirement=None,
                    reason="not claimed by any requirement",
                )
            )
            continue

        requirement, disposition = claim
        if disposition == Disposition.OPTIONAL_KEEP and not keep_optional:
            planned.append(
                PlannedStream(
                    stream=stream,
                    action=StreamAction.drop(),
                    disposition=disposition,
                    requirement=requirement,
                    reason="optional stream dropped (keep_optional disabled)",
                )
            )
        elif disposition in (Disposition.MUST_KEEP, Disposition.OPTIONAL_KEEP):
            entry = _plan_kept_stream(
                stream, disposition, requirement, capabilities, failures
            )
            if entry is not None:
                planned.append(entry)
        elif disposition == Disposition.PASSTHROUGH:
            planned.append(
                PlannedStream(
                    stream=stream,
                    action=StreamAction.keep(),
                    disposition=disposition,
                    requirement=requirement,
                    reason=f"{requirement.description}: passed through",
                )
            )
        else:
            planned.append(
                PlannedStream(
                    stream=stream,
                    action=StreamAction.drop(),
                    disposition=disposition,
                    requirement=requirement,
                    reason=f"{requirement.description}: declined",
                )
            )

    if failures:
        raise PlanningError(failures)

    normalized_source = (
        source_format.strip().lstrip(".").casefold() if source_format else None
    )
    plan = Plan(
        output_format=target_format,
        streams=tuple(planned),
        source_format=normalized_source,
        source_format_supported=(
            normalized_source is None
            or capabilities.supports_format(normalized_source)
        ),
    )
    logger.debug("Built plan: %s", plan.summary)
    return plan
