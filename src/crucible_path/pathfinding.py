from __future__ import annotations

import heapq
import logging
from itertools import count
from time import perf_counter

from crucible_path.errors import CostOverflow, OutOfBounds, SearchExhausted
from crucible_path.grid import CostGrid
from crucible_path.models import (
    Position,
    SearchConfig,
    SearchDiagnostics,
    SearchResult,
    SearchState,
    VisitedKey,
)
from crucible_path.policies.base_policy import MovementPolicy

logger = logging.getLogger(__name__)

FrontierEntry = tuple[int, Position, int, SearchState, "VisitedKey | None"]


def plan_constrained_path(
    grid: CostGrid,
    start: Position,
    goal: Position,
    policy: MovementPolicy,
    config: SearchConfig | None = None,
) -> tuple[SearchResult | None, SearchDiagnostics]:
    """Dijkstra over (position, heading, run length) states.

    The cost of a step is the cost of the cell being entered; the start
    cell is never paid for. Returns ``(None, diagnostics)`` when the goal
    cannot be reached under ``policy``.
    """

    cfg = config or SearchConfig()
    t0 = perf_counter()
    _require_in_bounds(grid, start, "start")
    _require_in_bounds(grid, goal, "goal")
    bound = policy.state_space_bound(grid)
    budget = bound if cfg.max_expansions is None else cfg.max_expansions

    logger.debug(
        "Searching %s -> %s on %dx%d grid with %s",
        start,
        goal,
        grid.height,
        grid.width,
        policy.describe(),
    )

    frontier: list[FrontierEntry] = []
    tie = count()
    heapq.heappush(frontier, (0, start, next(tie), SearchState(position=start, cost=0), None))

    visited: set[VisitedKey] = set()
    came_from: dict[VisitedKey, VisitedKey | None] = {}
    expanded_nodes = 0
    pushed_states = 1
    stale_pops = 0

    while frontier:
        _, _, _, state, parent = heapq.heappop(frontier)
        key = state.key
        if key in visited:
            stale_pops += 1
            continue
        visited.add(key)
        if cfg.track_path:
            came_from[key] = parent

        if state.position == goal and policy.is_goal_satisfied(state.direction, state.run_length):
            path = _reconstruct_path(came_from, key) if cfg.track_path else None
            diag = _diag(
                policy, expanded_nodes, pushed_states, stale_pops, t0, state.cost, budget, bound
            )
            logger.debug(
                "Reached %s at cost %d after %d expansions", goal, state.cost, expanded_nodes
            )
            return SearchResult(cost=state.cost, diagnostics=diag, path=path), diag

        if expanded_nodes >= budget:
            logger.warning(
                "Expansion budget of %d exhausted with %d states still queued",
                budget,
                len(frontier),
            )
            raise SearchExhausted(expanded_nodes, budget)
        expanded_nodes += 1

        for direction, run_length in policy.next_candidates(state.direction, state.run_length):
            nxt = grid.step(state.position, direction)
            if nxt is None:
                continue
            if (nxt, direction, run_length) in visited:
                continue

            new_cost = state.cost + grid.cost_at(nxt)
            if new_cost > cfg.max_cost:
                raise CostOverflow(new_cost, cfg.max_cost)

            successor = SearchState(
                position=nxt, cost=new_cost, direction=direction, run_length=run_length
            )
            heapq.heappush(
                frontier,
                (new_cost, nxt, next(tie), successor, key if cfg.track_path else None),
            )
            pushed_states += 1

    logger.debug("No path to %s after %d expansions", goal, expanded_nodes)
    return None, _diag(
        policy, expanded_nodes, pushed_states, stale_pops, t0, None, budget, bound
    )


def shortest_cost(
    grid: CostGrid,
    start: Position,
    goal: Position,
    policy: MovementPolicy,
    max_expansions: int | None = None,
) -> int | None:
    result, _ = plan_constrained_path(
        grid=grid,
        start=start,
        goal=goal,
        policy=policy,
        config=SearchConfig(max_expansions=max_expansions),
    )
    return None if result is None else result.cost


def shortest_path(
    grid: CostGrid,
    start: Position,
    goal: Position,
    policy: MovementPolicy,
    max_expansions: int | None = None,
) -> tuple[int, list[Position]] | None:
    """Like :func:`shortest_cost` but also returns the cells walked, start included."""

    result, _ = plan_constrained_path(
        grid=grid,
        start=start,
        goal=goal,
        policy=policy,
        config=SearchConfig(max_expansions=max_expansions, track_path=True),
    )
    if result is None or result.path is None:
        return None
    return result.cost, result.path


def path_cost(grid: CostGrid, path: list[Position]) -> int:
    """Cost of walking ``path``: every cell after the first is paid for once."""

    return sum(grid.cost_at(pos) for pos in path[1:])


def _require_in_bounds(grid: CostGrid, pos: Position, label: str) -> None:
    if not grid.in_bounds(pos):
        raise OutOfBounds(
            f"{label} position {pos} is outside a {grid.height}x{grid.width} grid"
        )


def _diag(
    policy: MovementPolicy,
    expanded_nodes: int,
    pushed_states: int,
    stale_pops: int,
    started_at: float,
    cost: int | None,
    budget: int,
    bound: int,
) -> SearchDiagnostics:
    elapsed_ms = (perf_counter() - started_at) * 1000.0
    return SearchDiagnostics(
        policy=policy.describe(),
        expanded_nodes=expanded_nodes,
        pushed_states=pushed_states,
        stale_pops=stale_pops,
        planning_time_ms=round(elapsed_ms, 3),
        found_path=cost is not None,
        path_cost=cost,
        expansion_budget=budget,
        state_space_bound=bound,
    )


def _reconstruct_path(
    came_from: dict[VisitedKey, VisitedKey | None],
    terminal: VisitedKey,
) -> list[Position]:
    positions: list[Position] = []
    cursor: VisitedKey | None = terminal
    while cursor is not None:
        positions.append(cursor[0])
        cursor = came_from[cursor]
    positions.reverse()
    return positions
