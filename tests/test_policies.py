import pytest

from crucible_path.errors import InvalidPolicy
from crucible_path.grid import CostGrid
from crucible_path.models import Direction, PolicySpec
from crucible_path.policies.factory import build_policy, crucible_policy, ultra_crucible_policy
from crucible_path.policies.forced_run_policy import ForcedRunPolicy
from crucible_path.policies.free_turn_policy import FreeTurnPolicy

N, S, W, E = Direction.NORTH, Direction.SOUTH, Direction.WEST, Direction.EAST


def test_initial_state_offers_every_direction_at_run_one() -> None:
    for policy in (crucible_policy(), ultra_crucible_policy()):
        assert policy.next_candidates(None, 0) == [(N, 1), (S, 1), (W, 1), (E, 1)]


def test_free_turn_offers_straight_then_turns() -> None:
    policy = FreeTurnPolicy(max_run=3)

    assert policy.next_candidates(E, 1) == [(E, 2), (N, 1), (S, 1)]
    assert policy.next_candidates(N, 2) == [(N, 3), (W, 1), (E, 1)]


def test_free_turn_drops_straight_once_max_run_is_reached() -> None:
    policy = FreeTurnPolicy(max_run=3)

    assert policy.next_candidates(E, 3) == [(N, 1), (S, 1)]


def test_forced_run_only_turns_after_min_run() -> None:
    policy = ForcedRunPolicy(min_run=4, max_run=10)

    assert policy.next_candidates(S, 2) == [(S, 3)]
    assert policy.next_candidates(S, 4) == [(S, 5), (W, 1), (E, 1)]
    assert policy.next_candidates(S, 10) == [(W, 1), (E, 1)]


def test_policies_never_reverse_direction() -> None:
    for policy in (crucible_policy(), ultra_crucible_policy()):
        for direction in Direction:
            for run_length in range(1, policy.max_run + 1):
                offered = [d for d, _ in policy.next_candidates(direction, run_length)]
                assert direction.opposite not in offered


def test_candidates_never_exceed_max_run() -> None:
    policy = ForcedRunPolicy(min_run=2, max_run=5)
    for direction in Direction:
        for run_length in range(1, 6):
            assert all(run <= 5 for _, run in policy.next_candidates(direction, run_length))


def test_forced_run_goal_requires_min_run_by_default() -> None:
    policy = ultra_crucible_policy()

    assert not policy.is_goal_satisfied(E, 3)
    assert policy.is_goal_satisfied(E, 4)
    assert not policy.is_goal_satisfied(None, 0)


def test_forced_run_goal_can_ignore_run_length() -> None:
    policy = ForcedRunPolicy(min_run=4, max_run=10, stop_requires_min_run=False)

    assert policy.is_goal_satisfied(E, 1)


def test_free_turn_goal_needs_a_run_longer_than_min_stop_run() -> None:
    assert not crucible_policy().is_goal_satisfied(None, 0)
    assert crucible_policy().is_goal_satisfied(E, 1)
    policy = FreeTurnPolicy(max_run=10, min_stop_run=4)
    assert not policy.is_goal_satisfied(S, 4)
    assert policy.is_goal_satisfied(S, 5)


@pytest.mark.parametrize(
    "factory",
    [
        lambda: ForcedRunPolicy(min_run=0, max_run=3),
        lambda: ForcedRunPolicy(min_run=5, max_run=3),
        lambda: FreeTurnPolicy(max_run=3, min_stop_run=3),
        lambda: FreeTurnPolicy(max_run=3, min_stop_run=4),
        lambda: FreeTurnPolicy(max_run=3, min_stop_run=-1),
        lambda: FreeTurnPolicy(max_run=0),
    ],
)
def test_invalid_run_bounds_are_rejected(factory) -> None:
    with pytest.raises(InvalidPolicy):
        factory()


def test_build_policy_maps_specs_to_policies() -> None:
    forced = build_policy(PolicySpec(kind="forced_run", min_run=4, max_run=10))
    free = build_policy(PolicySpec(kind="free_turn", min_run=2, max_run=3, stop_requires_min_run=True))

    assert isinstance(forced, ForcedRunPolicy)
    assert (forced.min_run, forced.max_run) == (4, 10)
    assert isinstance(free, FreeTurnPolicy)
    assert free.min_stop_run == 2

    with pytest.raises(InvalidPolicy):
        build_policy(PolicySpec(kind="diagonal"))  # type: ignore[arg-type]


def test_state_space_bound_counts_every_augmented_state() -> None:
    grid = CostGrid.from_rows([[1] * 13 for _ in range(13)])

    assert ultra_crucible_policy().state_space_bound(grid) == 13 * 13 * 4 * 10 + 1
