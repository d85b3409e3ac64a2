from __future__ import annotations

import argparse
import csv
import json
import logging
from dataclasses import replace
from pathlib import Path

from crucible_path.errors import CostOverflow, OutOfBounds, SearchExhausted
from crucible_path.grid import CostGrid
from crucible_path.loader import load_grid, load_run_config
from crucible_path.models import PolicySpec, Position, RunConfig, SearchConfig
from crucible_path.pathfinding import plan_constrained_path
from crucible_path.policies.factory import PRESETS, ULTRA_CRUCIBLE_SPEC, build_policy
from crucible_path.render import render_path

logger = logging.getLogger(__name__)


def _write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _write_csv(path: Path, rows: list[dict]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        return
    fieldnames = list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def load_input(input_path: str | Path) -> RunConfig:
    """Read either a plain digit grid or a JSON run file."""

    path = Path(input_path)
    if path.suffix.lower() == ".json":
        return load_run_config(path)
    grid = load_grid(path)
    return RunConfig(name=path.stem, rows=grid.rows(), policy=ULTRA_CRUCIBLE_SPEC)


def solve(
    grid: CostGrid,
    policy_spec: PolicySpec,
    start: Position,
    goal: Position,
    search: SearchConfig,
) -> dict:
    policy = build_policy(policy_spec)
    result, diag = plan_constrained_path(
        grid=grid,
        start=start,
        goal=goal,
        policy=policy,
        config=search,
    )
    payload = {
        "policy": policy_spec.to_dict(),
        "start": [start[0], start[1]],
        "goal": [goal[0], goal[1]],
        "cost": result.cost if result is not None else None,
        "diagnostics": diag.to_dict(),
    }
    if search.track_path:
        path = result.path if result is not None else None
        payload["path"] = [[row, col] for row, col in path] if path is not None else None
        payload["rendering"] = render_path(grid, path) if path is not None else None
    return payload


def run_single(
    input_path: str,
    policy: PolicySpec | None = None,
    start: Position | None = None,
    goal: Position | None = None,
    search: SearchConfig | None = None,
    output_dir: str | None = None,
) -> dict:
    config = load_input(input_path)
    grid = CostGrid.from_rows(config.rows)
    use_start = start if start is not None else config.start
    use_goal = goal or config.goal or grid.corner()

    payload = {
        "name": config.name,
        **solve(
            grid=grid,
            policy_spec=policy or config.policy,
            start=use_start,
            goal=use_goal,
            search=search or config.search,
        ),
    }

    if output_dir is not None:
        slug = Path(input_path).stem
        _write_json(Path(output_dir) / f"{slug}_{payload['policy']['kind']}.json", payload)
    return payload


def run_comparison(
    input_path: str,
    start: Position | None = None,
    goal: Position | None = None,
    search: SearchConfig | None = None,
    output_dir: str | None = None,
) -> dict:
    """Solve the same grid under every preset policy."""

    config = load_input(input_path)
    grid = CostGrid.from_rows(config.rows)
    use_start = start if start is not None else config.start
    use_goal = goal or config.goal or grid.corner()
    use_search = search or config.search

    results = {
        preset: solve(grid, spec, use_start, use_goal, use_search)
        for preset, spec in PRESETS.items()
    }
    payload = {
        "name": config.name,
        "start": [use_start[0], use_start[1]],
        "goal": [use_goal[0], use_goal[1]],
        **results,
    }

    if output_dir is not None:
        out_dir = Path(output_dir)
        slug = Path(input_path).stem
        _write_json(out_dir / f"{slug}_comparison.json", payload)
        _write_csv(
            out_dir / f"{slug}_comparison.csv",
            [
                {
                    "preset": preset,
                    "kind": result["policy"]["kind"],
                    "min_run": result["policy"]["min_run"],
                    "max_run": result["policy"]["max_run"],
                    "cost": result["cost"],
                    "expanded_nodes": result["diagnostics"]["expanded_nodes"],
                    "planning_time_ms": result["diagnostics"]["planning_time_ms"],
                }
                for preset, result in results.items()
            ],
        )
    return payload


def _parse_position(raw: str) -> Position:
    try:
        row, col = (int(part) for part in raw.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected ROW,COL but got {raw!r}") from exc
    return (row, col)


def _parse_policy(
    name: str | None,
    min_run: int | None,
    max_run: int | None,
) -> PolicySpec | None:
    if name is None:
        if min_run is None and max_run is None:
            return None
        name = "forced_run"
    if name in PRESETS:
        base = PRESETS[name]
        spec = replace(
            base,
            min_run=base.min_run if min_run is None else min_run,
            max_run=base.max_run if max_run is None else max_run,
        )
        if spec.kind == "free_turn":
            # free-turn rules only read min_run as a stop threshold
            spec = replace(spec, stop_requires_min_run=min_run is not None)
        return spec
    if name == "free_turn":
        return PolicySpec(
            kind="free_turn",
            min_run=1 if min_run is None else min_run,
            max_run=3 if max_run is None else max_run,
            stop_requires_min_run=min_run is not None,
        )
    return PolicySpec(
        kind="forced_run",
        min_run=4 if min_run is None else min_run,
        max_run=10 if max_run is None else max_run,
    )


def _format_summary(payload: dict) -> str:
    lines: list[str] = []
    if payload.get("rendering"):
        lines.append(payload["rendering"])
    if payload["cost"] is None:
        lines.append("No path found")
    else:
        lines.append(f"Min cost to exit: {payload['cost']}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Minimum heat-loss route across a digit grid under run-length rules"
    )
    parser.add_argument("grid", help="Path to a digit grid or a JSON run file")
    parser.add_argument(
        "--policy",
        choices=["crucible", "ultra", "free_turn", "forced_run"],
        default=None,
        help="Movement rules (defaults to the run file's policy, else 'ultra')",
    )
    parser.add_argument("--min-run", type=int, default=None, help="Straight cells required before turning")
    parser.add_argument("--max-run", type=int, default=None, help="Straight cells allowed before a forced turn")
    parser.add_argument("--start", type=_parse_position, default=None, help="Start cell as ROW,COL")
    parser.add_argument("--goal", type=_parse_position, default=None, help="Goal cell as ROW,COL")
    parser.add_argument(
        "--max-expansions",
        type=int,
        default=None,
        help="Abort the search after this many state expansions",
    )
    parser.add_argument("--show-path", action="store_true", help="Print the grid with the route marked")
    parser.add_argument("--compare", action="store_true", help="Solve with every preset policy")
    parser.add_argument("--json", action="store_true", help="Print the full JSON payload")
    parser.add_argument("--output-dir", default=None, help="Directory for JSON/CSV outputs")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        search = None
        if args.max_expansions is not None or args.show_path:
            base = load_input(args.grid).search
            search = replace(
                base,
                max_expansions=(
                    base.max_expansions if args.max_expansions is None else args.max_expansions
                ),
                track_path=base.track_path or args.show_path,
            )

        if args.compare:
            payload = run_comparison(
                input_path=args.grid,
                start=args.start,
                goal=args.goal,
                search=search,
                output_dir=args.output_dir,
            )
            if args.json:
                print(json.dumps(payload, indent=2))
                return
            for preset in PRESETS:
                print(f"[{preset}]")
                print(_format_summary(payload[preset]))
            return

        payload = run_single(
            input_path=args.grid,
            policy=_parse_policy(args.policy, args.min_run, args.max_run),
            start=args.start,
            goal=args.goal,
            search=search,
            output_dir=args.output_dir,
        )
    except OSError as exc:
        raise SystemExit(f"Could not read {args.grid}: {exc}") from exc
    except (ValueError, OutOfBounds) as exc:
        raise SystemExit(f"Invalid input: {exc}") from exc
    except (SearchExhausted, CostOverflow) as exc:
        logger.error("Search aborted: %s", exc)
        raise SystemExit(f"Search aborted: {exc}") from exc

    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print(_format_summary(payload))


if __name__ == "__main__":
    main()
