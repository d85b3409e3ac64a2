from __future__ import annotations

from abc import ABC, abstractmethod

from crucible_path.errors import InvalidPolicy
from crucible_path.grid import CostGrid
from crucible_path.models import Candidate, Direction


class MovementPolicy(ABC):
    """Decides which headings a mover may take next and when it may stop.

    A policy is stateless: every answer depends only on the heading of the
    last step and how many consecutive steps were taken in it. Run lengths
    count steps, so the first step out of the start cell has run length 1.
    """

    name = "movement"

    def __init__(self, min_run: int, max_run: int) -> None:
        if min_run < 1:
            raise InvalidPolicy(f"min_run must be at least 1, got {min_run}")
        if max_run < min_run:
            raise InvalidPolicy(f"max_run ({max_run}) must not be below min_run ({min_run})")
        self.min_run = min_run
        self.max_run = max_run

    def next_candidates(
        self, last_direction: Direction | None, run_length: int
    ) -> list[Candidate]:
        if last_direction is None:
            return [(direction, 1) for direction in Direction]

        candidates: list[Candidate] = []
        if run_length < self.max_run:
            candidates.append((last_direction, run_length + 1))
        if self.can_turn(run_length):
            candidates.extend((turn, 1) for turn in last_direction.perpendicular())
        return candidates

    @abstractmethod
    def can_turn(self, run_length: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_goal_satisfied(self, last_direction: Direction | None, run_length: int) -> bool:
        raise NotImplementedError

    def state_space_bound(self, grid: CostGrid) -> int:
        # every (cell, heading, run) triple plus the undirected start state
        return grid.width * grid.height * len(Direction) * self.max_run + 1

    def describe(self) -> str:
        return f"{self.name}(min_run={self.min_run}, max_run={self.max_run})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(min_run={self.min_run}, max_run={self.max_run})"
