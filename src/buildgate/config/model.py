"""Config data model for Buildgate evaluations."""

from __future__ import annotations

from dataclasses import dataclass, field

from buildgate.constants.config import (
    DEFAULT_CAN_COMPUTE_NEW,
    DEFAULT_CAN_RUN_ON_FAILED,
    DEFAULT_REQUIRE_HEALTH,
    DEFAULT_USE_DELTA_VALUES,
    DEFAULT_USE_STABLE_BUILD_AS_REFERENCE,
)
from buildgate.constants.thresholds import (
    DEFAULT_THRESHOLD_LIMIT,
    DELTA_MODE_ABSOLUTE,
    DELTA_MODE_SET_DIFFERENCE,
)
from buildgate.types import Bucket, DeltaMode, Severity


@dataclass(frozen=True)
class ThresholdConfig:
    """Bucket limits and health bounds.

    A bucket missing from ``unstable`` or ``failed`` has no limit and is
    never evaluated; it is not the same as a limit of zero.
    """

    unstable: dict[Bucket, int] = field(default_factory=dict)
    failed: dict[Bucket, int] = field(default_factory=dict)
    healthy: int | None = None
    unhealthy: int | None = None
    threshold_limit: Severity = DEFAULT_THRESHOLD_LIMIT  # type: ignore[assignment]

    @property
    def health_enabled(self) -> bool:
        """Whether both health bounds are set and ordered."""
        return self.healthy is not None and self.unhealthy is not None and self.unhealthy > self.healthy


@dataclass(frozen=True)
class GateConfig:
    """Resolved evaluation config."""

    thresholds: ThresholdConfig = ThresholdConfig()
    use_delta_values: bool = DEFAULT_USE_DELTA_VALUES
    can_compute_new: bool = DEFAULT_CAN_COMPUTE_NEW
    use_stable_build_as_reference: bool = DEFAULT_USE_STABLE_BUILD_AS_REFERENCE
    can_run_on_failed: bool = DEFAULT_CAN_RUN_ON_FAILED
    require_health: bool = DEFAULT_REQUIRE_HEALTH

    @property
    def delta_mode(self) -> DeltaMode:
        """Delta strategy selected by ``use_delta_values``."""
        return DELTA_MODE_SET_DIFFERENCE if self.use_delta_values else DELTA_MODE_ABSOLUTE  # type: ignore[return-value]
