from __future__ import annotations

from crucible_path.errors import InvalidPolicy
from crucible_path.models import Direction
from crucible_path.policies.base_policy import MovementPolicy


class FreeTurnPolicy(MovementPolicy):
    """Turn at any step, but never go straight for more than ``max_run`` cells.

    The goal only counts as reached once the final straight run is longer
    than ``min_stop_run``, so the default of 0 means "has moved at least once".
    """

    name = "free_turn"

    def __init__(self, max_run: int, min_stop_run: int = 0) -> None:
        super().__init__(min_run=1, max_run=max_run)
        if min_stop_run < 0 or min_stop_run >= max_run:
            raise InvalidPolicy(
                f"min_stop_run must be within [0, {max_run - 1}], got {min_stop_run}"
            )
        self.min_stop_run = min_stop_run

    def can_turn(self, run_length: int) -> bool:
        return True

    def is_goal_satisfied(self, last_direction: Direction | None, run_length: int) -> bool:
        return run_length > self.min_stop_run

    def describe(self) -> str:
        return f"{self.name}(max_run={self.max_run}, min_stop_run={self.min_stop_run})"

    def __repr__(self) -> str:
        return f"FreeTurnPolicy(max_run={self.max_run}, min_stop_run={self.min_stop_run})"
