from __future__ import annotations

from crucible_path.errors import InvalidPolicy
from crucible_path.models import PolicySpec
from crucible_path.policies.base_policy import MovementPolicy
from crucible_path.policies.forced_run_policy import ForcedRunPolicy
from crucible_path.policies.free_turn_policy import FreeTurnPolicy

POLICY_KINDS = ("free_turn", "forced_run")

CRUCIBLE_SPEC = PolicySpec(kind="free_turn", min_run=1, max_run=3, stop_requires_min_run=False)
ULTRA_CRUCIBLE_SPEC = PolicySpec(kind="forced_run", min_run=4, max_run=10, stop_requires_min_run=True)

PRESETS: dict[str, PolicySpec] = {
    "crucible": CRUCIBLE_SPEC,
    "ultra": ULTRA_CRUCIBLE_SPEC,
}


def build_policy(spec: PolicySpec) -> MovementPolicy:
    if spec.kind == "free_turn":
        min_stop_run = spec.min_run if spec.stop_requires_min_run else 0
        return FreeTurnPolicy(max_run=spec.max_run, min_stop_run=min_stop_run)
    if spec.kind == "forced_run":
        return ForcedRunPolicy(
            min_run=spec.min_run,
            max_run=spec.max_run,
            stop_requires_min_run=spec.stop_requires_min_run,
        )
    raise InvalidPolicy(f"Unknown policy kind {spec.kind!r}; expected one of {POLICY_KINDS}")


def crucible_policy() -> FreeTurnPolicy:
    """At most three cells straight, turning allowed at every step."""
    return FreeTurnPolicy(max_run=3)


def ultra_crucible_policy() -> ForcedRunPolicy:
    """Four to ten cells straight before any turn, and before stopping."""
    return ForcedRunPolicy(min_run=4, max_run=10)
