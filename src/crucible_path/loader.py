from __future__ import annotations

import json
from pathlib import Path

from crucible_path.errors import MalformedGrid
from crucible_path.grid import CostGrid
from crucible_path.models import (
    PolicySpec,
    Position,
    RunConfig,
    SearchConfig,
)


def parse_rows(lines: list[str]) -> list[list[int]]:
    """Turn lines of single digits into integer rows.

    Trailing blank lines are dropped; any other blank line, a non-digit
    character or a row of the wrong length raises ``MalformedGrid``.
    """

    stripped = [line.rstrip("\r\n").strip() for line in lines]
    while stripped and not stripped[-1]:
        stripped.pop()
    if not stripped:
        raise MalformedGrid("Grid input is empty")

    rows: list[list[int]] = []
    width = len(stripped[0])
    for line_no, line in enumerate(stripped, start=1):
        if len(line) != width:
            raise MalformedGrid(f"Line {line_no} has {len(line)} cells, expected {width}")
        row: list[int] = []
        for char in line:
            if char not in "0123456789":
                raise MalformedGrid(f"Line {line_no} contains non-digit character {char!r}")
            row.append(int(char))
        rows.append(row)
    return rows


def parse_grid(text: str) -> CostGrid:
    return CostGrid.from_rows(parse_rows(text.splitlines()))


def load_grid(path: str | Path) -> CostGrid:
    path = Path(path)
    return parse_grid(path.read_text(encoding="utf-8"))


def load_run_config(path: str | Path) -> RunConfig:
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object, got {type(data).__name__}")

    if "grid_file" in data:
        grid_path = Path(data["grid_file"])
        if not grid_path.is_absolute():
            grid_path = path.parent / grid_path
        rows = parse_rows(grid_path.read_text(encoding="utf-8").splitlines())
    elif "grid" in data:
        rows = parse_rows([str(line) for line in data["grid"]])
    else:
        raise MalformedGrid(f"{path} defines neither 'grid' nor 'grid_file'")

    policy_raw = data.get("policy", {})
    policy = PolicySpec(
        kind=policy_raw.get("kind", "forced_run"),
        min_run=int(policy_raw.get("min_run", 4)),
        max_run=int(policy_raw.get("max_run", 10)),
        stop_requires_min_run=bool(policy_raw.get("stop_requires_min_run", True)),
    )

    search_raw = data.get("search", {})
    max_expansions = search_raw.get("max_expansions")
    search = SearchConfig(
        max_expansions=None if max_expansions is None else int(max_expansions),
        track_path=bool(search_raw.get("track_path", False)),
    )

    return RunConfig(
        name=data.get("name", path.stem),
        rows=rows,
        policy=policy,
        search=search,
        start=_position(data.get("start", [0, 0])),
        goal=_position(data["goal"]) if "goal" in data else None,
    )


def _position(raw: list[int]) -> Position:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"Position must be a [row, col] pair, got {raw!r}")
    return (int(raw[0]), int(raw[1]))
