from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from planner.data_loader import DATA_DIR, DataError, load_data
from planner.finance import Finance
from planner.formatting import format_currency, format_number
from planner.optimizer import best_crop_by_profit_per_day, best_crop_by_profit_per_tile, generate_optimal_plan
from planner.seasons import SEASON_DAYS, SEASONS, day_of_year_from_season_day
from planner.session import Planner
from planner.validation import ValidationError

TOP_CROPS = 5
DEFAULT_TILES = 100


@dataclass(frozen=True)
class CliArgs:
    plans_path: str | None = None
    profession: str | None = None
    level: int | None = None
    tiles: int = DEFAULT_TILES
    data_dir: str | None = None
    day: int = 1
    verbose: bool = False


def _option_value(argv: list[str], idx: int, name: str) -> str:
    if idx + 1 >= len(argv):
        raise ValueError(f"missing value for {name}")
    return argv[idx + 1]


def _parse_args(argv: list[str]) -> CliArgs:
    """Parse CLI args: [plans.json] [--profession P] [--level N] [--tiles N] [--day D] [--data DIR] [-v]."""
    values: dict[str, str] = {}
    args: list[str] = []
    verbose = False
    idx = 1
    while idx < len(argv):
        arg = argv[idx]
        if arg in ("-v", "--verbose"):
            verbose = True
            idx += 1
            continue
        if arg in ("--profession", "--level", "--tiles", "--data", "--day"):
            values[arg] = _option_value(argv, idx, arg)
            idx += 2
            continue
        if arg.startswith("--") and "=" in arg:
            name, value = arg.split("=", 1)
            values[name] = value
            idx += 1
            continue
        args.append(arg)
        idx += 1

    if len(args) > 1:
        raise ValueError("expected at most one plans file")
    day = int(values.get("--day", 1))
    if not 1 <= day <= SEASON_DAYS:
        raise ValueError(f"--day must be in 1..{SEASON_DAYS}")
    return CliArgs(
        plans_path=args[0] if args else None,
        profession=values.get("--profession"),
        level=int(values["--level"]) if "--level" in values else None,
        tiles=int(values.get("--tiles", DEFAULT_TILES)),
        data_dir=values.get("--data"),
        day=day,
        verbose=verbose,
    )


def _finance_line(label: str, finance: Finance) -> str:
    return (
        f"  {label:<8} cost {format_currency(finance.cost)}"
        f"  revenue {format_currency(finance.revenue.min)}-{format_currency(finance.revenue.max)}"
        f"  profit {format_currency(finance.profit.min)}-{format_currency(finance.profit.max)}"
        f"  plantings {format_number(finance.plantings)}"
    )


def main() -> int:
    """Print plan totals and the best crops for the current player settings."""
    try:
        args = _parse_args(sys.argv)
    except ValueError as exc:
        print(f"error: {exc}")
        print("Usage: python -m planner.main [plans.json] [--profession tiller] [--level 10] [--tiles 100] [--day 1]")
        return 2

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        loaded = load_data(Path(args.data_dir) if args.data_dir else DATA_DIR)
    except DataError as exc:
        print(f"error: {exc}")
        return 1

    planner = Planner.from_data(loaded)
    if args.profession is not None:
        planner.set_profession(args.profession)
    if args.level is not None:
        planner.set_farming_level(args.level)
    if args.plans_path:
        try:
            count = planner.import_data(Path(args.plans_path).read_text(encoding="utf-8"))
        except ValidationError as exc:
            print(f"error: {exc}")
            return 1
        print(f"imported {count} plans into {len(planner.state.years)} year(s)")

    player = planner.state.player
    print(f"profession={player.profession} farming_level={player.farming_level} crops={len(planner.rows)}\n")

    for year in planner.state.years:
        for farm in year.farms():
            if not farm.plan_count():
                continue
            print(f"year {year.index + 1} {farm.kind}:")
            for plan in farm.iter_plans():
                print(
                    f"  day {plan.date:>3} {plan.crop.name:<16} x{plan.amount}"
                    f"  grow {plan.get_grow_time(player.profession)}d  cost {format_currency(plan.get_cost())}"
                )
            for season in SEASONS:
                print(_finance_line(season.name, farm.totals.season[season.index]))
            print(_finance_line("Year", farm.totals.year))
            print()

    for season in SEASONS:
        rows = [row for row in planner.rows if row.crop.can_grow_in_season(season)]
        if not rows:
            continue
        ranked = sorted(rows, key=lambda row: row.profit_per_day, reverse=True)[:TOP_CROPS]
        print(f"{season.name} best crops (profit/day):")
        for row in ranked:
            print(
                f"  {row.name:<16} {format_number(row.profit_per_day, 1):>8}g/day"
                f"  fixed budget {format_number(row.fixed_profit, 1)}g/day"
                f"  grow {row.growth_days}d"
            )
        best_tile = best_crop_by_profit_per_tile(rows)
        best_day = best_crop_by_profit_per_day(rows)
        if best_tile is not None and best_day is not None:
            print(f"  best per tile: {best_tile.name}  best per day: {best_day.name}")
        days_remaining = season.end - day_of_year_from_season_day(season.id, args.day) + 1
        plan = generate_optimal_plan(rows, args.tiles, days_remaining)
        for allocation in plan.allocations:
            print(
                f"  {plan.strategy}: {allocation.tiles_assigned} tiles of {allocation.crop_name}"
                f" -> {format_currency(allocation.expected_profit)}"
            )
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
