"""Minimum-cost routes over weighted grids under straight-run constraints."""

from crucible_path.grid import CostGrid
from crucible_path.loader import load_grid, parse_grid
from crucible_path.pathfinding import plan_constrained_path, shortest_cost, shortest_path
from crucible_path.policies.factory import build_policy, crucible_policy, ultra_crucible_policy
from crucible_path.policies.forced_run_policy import ForcedRunPolicy
from crucible_path.policies.free_turn_policy import FreeTurnPolicy

__all__ = [
    "CostGrid",
    "ForcedRunPolicy",
    "FreeTurnPolicy",
    "build_policy",
    "crucible_policy",
    "load_grid",
    "parse_grid",
    "plan_constrained_path",
    "shortest_cost",
    "shortest_path",
    "ultra_crucible_policy",
]
