import json
from pathlib import Path

import pytest

from crucible_path.errors import MalformedGrid
from crucible_path.loader import load_grid, load_run_config, parse_grid

ROOT = Path(__file__).resolve().parents[1]


def test_parse_grid_reads_digit_rows_and_ignores_trailing_blank_lines() -> None:
    grid = parse_grid("123\n456\n\n")

    assert grid.rows() == [[1, 2, 3], [4, 5, 6]]


def test_parse_grid_accepts_windows_line_endings() -> None:
    grid = parse_grid("12\r\n34\r\n")

    assert grid.rows() == [[1, 2], [3, 4]]


@pytest.mark.parametrize("text", ["", "\n\n", "12\n3\n", "12\n3x\n", "12\n\n34\n"])
def test_parse_grid_rejects_malformed_input(text: str) -> None:
    with pytest.raises(MalformedGrid):
        parse_grid(text)


def test_load_grid_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "grid.txt"
    path.write_text("19\n91\n", encoding="utf-8")

    grid = load_grid(path)

    assert grid.width == 2
    assert grid.cost_at((1, 0)) == 9


def test_load_grid_missing_file_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        load_grid(tmp_path / "missing.txt")


def test_run_config_with_inline_grid() -> None:
    config = load_run_config(ROOT / "configs" / "runs" / "small_crucible.json")

    assert config.name == "small_crucible"
    assert config.rows[0] == [1, 6, 2, 3]
    assert config.goal == (0, 3)
    assert config.policy.kind == "free_turn"
    assert config.policy.max_run == 3
    assert not config.search.track_path


def test_run_config_resolves_grid_file_relative_to_itself(tmp_path: Path) -> None:
    (tmp_path / "grids").mkdir()
    (tmp_path / "grids" / "tiny.txt").write_text("11\n11\n", encoding="utf-8")
    run_path = tmp_path / "run.json"
    run_path.write_text(
        json.dumps(
            {
                "grid_file": "grids/tiny.txt",
                "policy": {"kind": "forced_run", "min_run": 1, "max_run": 2},
                "search": {"max_expansions": 50, "track_path": True},
            }
        ),
        encoding="utf-8",
    )

    config = load_run_config(run_path)

    assert config.name == "run"
    assert config.rows == [[1, 1], [1, 1]]
    assert config.start == (0, 0)
    assert config.goal is None
    assert config.policy.min_run == 1
    assert config.search.max_expansions == 50
    assert config.search.track_path


def test_run_config_without_grid_is_rejected(tmp_path: Path) -> None:
    run_path = tmp_path / "run.json"
    run_path.write_text(json.dumps({"name": "empty"}), encoding="utf-8")

    with pytest.raises(MalformedGrid):
        load_run_config(run_path)


@pytest.mark.parametrize("payload", [[["11", "11"]], "11\n11", 7])
def test_run_config_top_level_must_be_an_object(tmp_path: Path, payload) -> None:
    run_path = tmp_path / "run.json"
    run_path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValueError, match="JSON object"):
        load_run_config(run_path)


def test_run_config_keeps_an_explicit_zero_budget(tmp_path: Path) -> None:
    run_path = tmp_path / "run.json"
    run_path.write_text(
        json.dumps({"grid": ["11", "11"], "search": {"max_expansions": 0}}),
        encoding="utf-8",
    )

    assert load_run_config(run_path).search.max_expansions == 0
    assert load_run_config(ROOT / "configs" / "runs" / "small_crucible.json").search.max_expansions is None
