"""Validated policy: capabilities plus requirements."""

from __future__ import annotations

from dataclasses import dataclass

from trackplan.policy.types.capabilities import CapabilitySet
from trackplan.policy.types.enums import RequirementOrder
from trackplan.policy.types.requirements import (
    RequirementSet,
    order_requirements,
)


@dataclass(frozen=True)
class PolicySchema:
    """Everything the policy engine needs besides the stream catalog."""

    capabilities: CapabilitySet
    requirements: RequirementSet
    output_format: str | None = None
    """Explicit output format; defaults to the first supported format."""

    requirement_order: RequirementOrder = RequirementOrder.DECLARED

    def __post_init__(self) -> None:
        if self.output_format is not None:
            fmt = self.output_format.strip().lstrip(".").casefold()
            if not self.capabilities.supports_format(fmt):
                allowed = ", ".join(self.capabilities.supported_formats)
                raise ValueError(
                    f"output_format '{self.output_format}' is not one of the "
                    f"supported formats: {allowed}"
                )
            object.__setattr__(self, "output_format", fmt)

    @property
    def target_format(self) -> str:
        return self.output_format or self.capabilities.default_format

    @property
    def ordered_requirements(self) -> RequirementSet:
        """Requirements in first-claim order."""
        return order_requirements(self.requirements, self.requirement_order)
