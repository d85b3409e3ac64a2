from __future__ import annotations

from html import escape
from pathlib import Path
import sys

import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from crucible_path.errors import CruciblePathError
from crucible_path.grid import CostGrid
from crucible_path.loader import parse_grid
from crucible_path.models import PolicySpec, SearchConfig
from crucible_path.pathfinding import plan_constrained_path
from crucible_path.policies.factory import PRESETS, build_policy

GRID_DIR = ROOT / "configs" / "grids"

DIAGNOSTIC_DOCS = {
    "expanded_nodes": "States taken off the frontier and expanded.",
    "pushed_states": "States pushed onto the frontier, duplicates included.",
    "stale_pops": "Pops discarded because the state was already settled.",
    "planning_time_ms": "Wall-clock search time.",
    "expansion_budget": "Expansions allowed before the search is aborted.",
    "state_space_bound": "Number of distinct (cell, heading, run) states.",
}


def _inject_styles() -> None:
    st.markdown(
        """
        <style>
            .cp-grid-wrap {
                overflow-x: auto;
                padding: 0.6rem;
                border: 1px solid #dce5f2;
                border-radius: 12px;
                background: #f8fafc;
            }
            .cp-grid {
                display: grid;
                gap: 3px;
                width: max-content;
            }
            .cp-cell {
                width: 26px;
                height: 26px;
                border-radius: 6px;
                display: flex;
                align-items: center;
                justify-content: center;
                font-size: 11px;
                font-weight: 700;
                border: 1px solid #d9e3ef;
                color: #334155;
            }
            .cp-cell.route { background: #f97316; border-color: #c2410c; color: #ffffff; }
            .cp-cell.endpoint { background: #0ea5e9; border-color: #0369a1; color: #ffffff; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _heat_style(value: int) -> str:
    alpha = 0.04 + 0.05 * min(value, 9)
    return f"background: rgba(239, 68, 68, {alpha:.2f});"


def _render_grid_html(grid: CostGrid, path: list[tuple[int, int]] | None) -> str:
    route = set(path or [])
    endpoints = {path[0], path[-1]} if path else set()
    cells: list[str] = []
    for row_index, row in enumerate(grid.cells):
        for col_index, value in enumerate(row):
            pos = (row_index, col_index)
            if pos in endpoints:
                cells.append(f'<div class="cp-cell endpoint">{value}</div>')
            elif pos in route:
                cells.append(f'<div class="cp-cell route">{value}</div>')
            else:
                cells.append(f'<div class="cp-cell" style="{_heat_style(value)}">{escape(str(value))}</div>')
    return (
        '<div class="cp-grid-wrap">'
        f'<div class="cp-grid" style="grid-template-columns: repeat({grid.width}, 26px);">'
        + "".join(cells)
        + "</div></div>"
    )


def _policy_from_sidebar() -> PolicySpec:
    preset = st.sidebar.selectbox("Policy", list(PRESETS) + ["custom"])
    if preset != "custom":
        return PRESETS[preset]

    kind = st.sidebar.selectbox("Kind", ["forced_run", "free_turn"])
    min_run = int(st.sidebar.number_input("min_run", min_value=1, value=4, step=1))
    max_run = int(st.sidebar.number_input("max_run", min_value=1, value=10, step=1))
    stop_requires = st.sidebar.checkbox("Goal requires min_run", value=kind == "forced_run")
    return PolicySpec(kind=kind, min_run=min_run, max_run=max_run, stop_requires_min_run=stop_requires)


def main() -> None:
    st.set_page_config(page_title="Crucible Path", layout="wide")
    _inject_styles()
    st.title("Constrained minimum-cost routes")

    grid_paths = sorted(GRID_DIR.glob("*.txt"))
    source = st.sidebar.radio("Grid source", ["File", "Paste"])
    if source == "File":
        if not grid_paths:
            st.error("No grid files found under configs/grids.")
            return
        selected = st.sidebar.selectbox("Grid", [path.name for path in grid_paths])
        text = (GRID_DIR / selected).read_text(encoding="utf-8")
    else:
        text = st.sidebar.text_area("Digits, one row per line", value="123\n111\n251")

    try:
        grid = parse_grid(text)
    except CruciblePathError as exc:
        st.error(f"Could not parse grid: {exc}")
        return

    policy_spec = _policy_from_sidebar()
    c1, c2 = st.sidebar.columns(2)
    goal_row = int(c1.number_input("Goal row", 0, grid.height - 1, grid.height - 1))
    goal_col = int(c2.number_input("Goal col", 0, grid.width - 1, grid.width - 1))
    max_expansions = int(
        st.sidebar.number_input(
            "Max expansions",
            min_value=0,
            value=0,
            step=100_000,
            help="0 allows one expansion per reachable state.",
        )
    )

    if not st.sidebar.button("Solve", type="primary"):
        st.markdown(_render_grid_html(grid, None), unsafe_allow_html=True)
        return

    try:
        result, diag = plan_constrained_path(
            grid=grid,
            start=(0, 0),
            goal=(goal_row, goal_col),
            policy=build_policy(policy_spec),
            config=SearchConfig(max_expansions=max_expansions or None, track_path=True),
        )
    except CruciblePathError as exc:
        st.error(f"Search aborted: {exc}")
        return

    m1, m2, m3 = st.columns(3)
    m1.metric("Cost", "-" if result is None else result.cost)
    m2.metric("Expanded", diag.expanded_nodes)
    m3.metric("Time (ms)", diag.planning_time_ms)
    if result is None:
        st.warning("No path under these movement rules.")
    st.markdown(_render_grid_html(grid, result.path if result else None), unsafe_allow_html=True)

    with st.expander("Diagnostics", expanded=False):
        st.json(diag.to_dict())
        st.markdown("\n".join([f"- `{k}`: {v}" for k, v in DIAGNOSTIC_DOCS.items()]))


if __name__ == "__main__":
    main()
