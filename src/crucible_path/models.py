from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Literal

Position = tuple[int, int]
PolicyKind = Literal["free_turn", "forced_run"]

DEFAULT_MAX_COST = 2**63 - 1


class Direction(IntEnum):
    """Axis-aligned heading; the integer order is only used for tie-breaks."""

    NORTH = 0
    SOUTH = 1
    WEST = 2
    EAST = 3

    @property
    def delta(self) -> Position:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def perpendicular(self) -> tuple["Direction", "Direction"]:
        if self in (Direction.NORTH, Direction.SOUTH):
            return (Direction.WEST, Direction.EAST)
        return (Direction.NORTH, Direction.SOUTH)


# (d_row, d_col)
_DELTAS: dict[Direction, Position] = {
    Direction.NORTH: (-1, 0),
    Direction.SOUTH: (1, 0),
    Direction.WEST: (0, -1),
    Direction.EAST: (0, 1),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
    Direction.EAST: Direction.WEST,
}

VisitedKey = tuple[Position, Direction | None, int]
Candidate = tuple[Direction, int]


@dataclass(frozen=True)
class SearchState:
    position: Position
    cost: int
    direction: Direction | None = None
    run_length: int = 0

    @property
    def key(self) -> VisitedKey:
        return (self.position, self.direction, self.run_length)


@dataclass(frozen=True)
class SearchConfig:
    # None budgets one expansion per reachable state, see MovementPolicy.state_space_bound
    max_expansions: int | None = None
    track_path: bool = False
    max_cost: int = DEFAULT_MAX_COST


@dataclass(frozen=True)
class PolicySpec:
    kind: PolicyKind = "forced_run"
    min_run: int = 4
    max_run: int = 10
    stop_requires_min_run: bool = True

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "min_run": self.min_run,
            "max_run": self.max_run,
            "stop_requires_min_run": self.stop_requires_min_run,
        }


@dataclass(frozen=True)
class SearchDiagnostics:
    policy: str
    expanded_nodes: int
    pushed_states: int
    stale_pops: int
    planning_time_ms: float
    found_path: bool
    path_cost: int | None = None
    expansion_budget: int = 0
    state_space_bound: int = 0

    def to_dict(self) -> dict:
        return {
            "policy": self.policy,
            "expanded_nodes": self.expanded_nodes,
            "pushed_states": self.pushed_states,
            "stale_pops": self.stale_pops,
            "planning_time_ms": self.planning_time_ms,
            "found_path": self.found_path,
            "path_cost": self.path_cost,
            "expansion_budget": self.expansion_budget,
            "state_space_bound": self.state_space_bound,
        }


@dataclass(frozen=True)
class SearchResult:
    cost: int
    diagnostics: SearchDiagnostics
    path: list[Position] | None = None

    def to_dict(self) -> dict:
        return {
            "cost": self.cost,
            "path": [[row, col] for row, col in self.path] if self.path is not None else None,
            "diagnostics": self.diagnostics.to_dict(),
        }


@dataclass
class RunConfig:
    name: str
    rows: list[list[int]]
    policy: PolicySpec = field(default_factory=PolicySpec)
    search: SearchConfig = field(default_factory=SearchConfig)
    start: Position = (0, 0)
    goal: Position | None = None
