import json
import sys
from pathlib import Path

from planner import chart_app
from planner.chart_app import ProfitSeries, profit_series, render_chart
from planner.farm import Farm
from planner.finance import Span

SHIPPED_DATA = Path(__file__).resolve().parents[1] / "data"


def _farm() -> Farm:
    farm = Farm()
    farm.totals.day_finance(1).add_planting(40)
    farm.totals.day_finance(5).add_revenue(Span(70, 80))
    return farm


def test_profit_series_single_year():
    series = profit_series([_farm()])
    assert len(series.days) == 112
    assert series.days[0] == 1
    assert series.daily_min[0] == -40
    assert series.daily_max[4] == 80
    assert series.cumulative_min[-1] == 30
    assert series.cumulative_max[-1] == 40


def test_profit_series_offsets_years():
    series = profit_series([Farm(), _farm()])
    assert len(series.days) == 224
    assert series.daily_min[112] == -40
    assert series.cumulative_max[111] == 0


def test_render_chart(tmp_path):
    series = profit_series([_farm()])
    output = render_chart(series, tmp_path / "chart.png")
    assert output.exists()
    assert isinstance(series, ProfitSeries)


def test_main_writes_chart(tmp_path, capsys, monkeypatch):
    plans = tmp_path / "plans.json"
    plans.write_text(
        json.dumps({"plans": [{"farm": {"1": [{"crop": "parsnip", "amount": 10}]}}], "version": "2"}),
        encoding="utf-8",
    )
    output = tmp_path / "profit.png"
    monkeypatch.setattr(chart_app, "DATA_DIR", SHIPPED_DATA)
    monkeypatch.setattr(sys, "argv", ["chart_app.py", str(plans), str(output)])
    assert chart_app.main() == 0
    assert output.exists()
    assert "plans: 1 across 1 year(s)" in capsys.readouterr().out


def test_main_usage(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["chart_app.py"])
    assert chart_app.main() == 2
