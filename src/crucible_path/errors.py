from __future__ import annotations


class CruciblePathError(Exception):
    """Base class for every fatal condition raised by crucible_path."""


class MalformedGrid(CruciblePathError, ValueError):
    pass


class OutOfBounds(CruciblePathError, IndexError):
    pass


class InvalidPolicy(CruciblePathError, ValueError):
    pass


class SearchExhausted(CruciblePathError, RuntimeError):
    """Expansion budget ran out before the frontier emptied."""

    def __init__(self, expanded_nodes: int, max_expansions: int) -> None:
        super().__init__(
            f"Search exceeded {max_expansions} expansions "
            f"(expanded {expanded_nodes}); raise max_expansions or check the policy"
        )
        self.expanded_nodes = expanded_nodes
        self.max_expansions = max_expansions


class CostOverflow(CruciblePathError, OverflowError):
    def __init__(self, cost: int, ceiling: int) -> None:
        super().__init__(f"Accumulated cost {cost} exceeds ceiling {ceiling}")
        self.cost = cost
        self.ceiling = ceiling
