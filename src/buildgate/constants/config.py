"""Configuration defaults, filenames, and flat option names."""

from __future__ import annotations

CONFIG_FILENAME: str = "buildgate.yaml"

DEFAULT_USE_DELTA_VALUES: bool = True
DEFAULT_CAN_COMPUTE_NEW: bool = True
DEFAULT_USE_STABLE_BUILD_AS_REFERENCE: bool = False
DEFAULT_CAN_RUN_ON_FAILED: bool = False
DEFAULT_REQUIRE_HEALTH: bool = False

# Flat option names of the language-agnostic options map, mapped to buckets.
UNSTABLE_OPTION_BUCKETS: dict[str, str] = {
    "unstableTotalAll": "total_all",
    "unstableTotalHigh": "total_high",
    "unstableTotalNormal": "total_normal",
    "unstableTotalLow": "total_low",
    "unstableNewAll": "new_all",
    "unstableNewHigh": "new_high",
    "unstableNewNormal": "new_normal",
    "unstableNewLow": "new_low",
}
FAILED_OPTION_BUCKETS: dict[str, str] = {
    "failedTotalAll": "total_all",
    "failedTotalHigh": "total_high",
    "failedTotalNormal": "total_normal",
    "failedTotalLow": "total_low",
    "failedNewAll": "new_all",
    "failedNewHigh": "new_high",
    "failedNewNormal": "new_normal",
    "failedNewLow": "new_low",
}

OPTION_HEALTHY: str = "healthy"
OPTION_UNHEALTHY_KEYS: tuple[str, ...] = ("unHealthy", "unhealthy")
OPTION_THRESHOLD_LIMIT: str = "thresholdLimit"
OPTION_BOOL_KEYS: dict[str, str] = {
    "useDeltaValues": "use_delta_values",
    "canComputeNew": "can_compute_new",
    "useStableBuildAsReference": "use_stable_build_as_reference",
    "canRunOnFailed": "can_run_on_failed",
    "requireHealth": "require_health",
}
