from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from planner.data_loader import DATA_DIR, DataError, load_data
from planner.farm import Farm
from planner.seasons import SEASONS, YEAR_DAYS
from planner.session import Planner
from planner.validation import ValidationError

DEFAULT_OUTPUT = "planner_profit.png"


@dataclass(frozen=True)
class ProfitSeries:
    days: np.ndarray
    daily_min: np.ndarray
    daily_max: np.ndarray

    @property
    def cumulative_min(self) -> np.ndarray:
        return np.cumsum(self.daily_min)

    @property
    def cumulative_max(self) -> np.ndarray:
        return np.cumsum(self.daily_max)


def profit_series(farms: list[Farm]) -> ProfitSeries:
    """Daily min/max profit over consecutive farm-years, one entry per day."""
    total_days = YEAR_DAYS * max(1, len(farms))
    daily_min = np.zeros(total_days, dtype=float)
    daily_max = np.zeros(total_days, dtype=float)
    for offset, farm in enumerate(farms):
        for date, finance in farm.totals.day.items():
            idx = offset * YEAR_DAYS + date - 1
            daily_min[idx] += finance.profit.min
            daily_max[idx] += finance.profit.max
    return ProfitSeries(days=np.arange(1, total_days + 1), daily_min=daily_min, daily_max=daily_max)


def combined_series(planner: Planner) -> ProfitSeries:
    """Open-field and greenhouse profit summed per day across all years."""
    years = planner.state.years
    farm = profit_series([year.farm("farm") for year in years])
    greenhouse = profit_series([year.farm("greenhouse") for year in years])
    return ProfitSeries(
        days=farm.days,
        daily_min=farm.daily_min + greenhouse.daily_min,
        daily_max=farm.daily_max + greenhouse.daily_max,
    )


def render_chart(series: ProfitSeries, output_path: str | Path) -> Path:
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(series.days, series.cumulative_min, label="cumulative profit (min)", linewidth=2)
    ax.plot(series.days, series.cumulative_max, label="cumulative profit (max)", linewidth=2)
    ax.bar(series.days, series.daily_min, color="0.6", alpha=0.4, label="daily profit (min)")
    for year_start in range(0, len(series.days), YEAR_DAYS):
        for season in SEASONS:
            ax.axvline(year_start + season.start, color="0.85", linewidth=0.8)
    ax.set_title("Crop plan profit")
    ax.set_xlabel("Day")
    ax.set_ylabel("Gold")
    ax.legend()
    ax.grid(True, alpha=0.2)

    output = Path(output_path)
    fig.tight_layout()
    fig.savefig(output, dpi=150)
    plt.close(fig)
    return output


def main() -> int:
    if len(sys.argv) not in (2, 3):
        print("Usage: python -m planner.chart_app path/to/plans.json [output.png]")
        return 2

    plans_path = sys.argv[1]
    output_path = sys.argv[2] if len(sys.argv) == 3 else DEFAULT_OUTPUT

    try:
        planner = Planner.from_data(load_data(DATA_DIR))
        count = planner.import_data(Path(plans_path).read_text(encoding="utf-8"))
    except (DataError, ValidationError) as exc:
        print(f"error: {exc}")
        return 1

    series = combined_series(planner)
    print(f"plans: {count} across {len(planner.state.years)} year(s)")
    print(f"final profit: min {series.cumulative_min[-1]:,.0f}g, max {series.cumulative_max[-1]:,.0f}g")
    output = render_chart(series, output_path)
    print(f"chart saved to {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
