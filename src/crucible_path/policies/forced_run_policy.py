from __future__ import annotations

from crucible_path.models import Direction
from crucible_path.policies.base_policy import MovementPolicy


class ForcedRunPolicy(MovementPolicy):
    """Commit to ``min_run`` straight steps before turning, at most ``max_run``."""

    name = "forced_run"

    def __init__(self, min_run: int, max_run: int, stop_requires_min_run: bool = True) -> None:
        super().__init__(min_run=min_run, max_run=max_run)
        self.stop_requires_min_run = stop_requires_min_run

    def can_turn(self, run_length: int) -> bool:
        return run_length >= self.min_run

    def is_goal_satisfied(self, last_direction: Direction | None, run_length: int) -> bool:
        if not self.stop_requires_min_run:
            return True
        return run_length >= self.min_run

    def __repr__(self) -> str:
        return (
            f"ForcedRunPolicy(min_run={self.min_run}, max_run={self.max_run}, "
            f"stop_requires_min_run={self.stop_requires_min_run})"
        )
