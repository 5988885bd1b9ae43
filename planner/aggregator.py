from __future__ import annotations

import logging

from planner.farm import Farm, FarmTotals, build_harvest
from planner.lifecycle import crop_lifecycle
from planner.seasons import YEAR_DAYS, season_index_for_day
from planner.state import PlannerState

logger = logging.getLogger(__name__)


def update(state: PlannerState, farm: Farm, full_update: bool = False) -> None:
    """
    Rebuild a farm's harvests and finance totals from its plans.

    Plantings charge their cost to the planting day and season. Harvests credit
    revenue to the harvest day and the harvest's own season. When the farm holds
    regrowing crops, is a greenhouse, or a full update is requested, the same
    kind of farm in the following year is rebuilt as well.
    """
    propagate = full_update or farm.has_regrowing_crops() or farm.greenhouse

    farm.harvests = {}
    farm.totals = totals = FarmTotals()
    player = state.player

    for plan in farm.iter_plans():
        plan.cost_breakdown()
        plan.refresh_water_retention()
        totals.day_finance(plan.date).add_planting(plan.total_cost)
        totals.season[season_index_for_day(plan.date)].add_planting(plan.total_cost, plan.amount)

        limit = YEAR_DAYS if farm.greenhouse else plan.crop.end
        events = crop_lifecycle(plan.crop, plan.date, limit, plan.fertilizer, player.profession)
        plan.harvests = []
        for i, event in enumerate(events):
            harvest = build_harvest(plan, event.day, i > 0, player)
            plan.harvests.append(harvest)
            farm.harvests.setdefault(event.day, []).append(harvest)

            totals.day_finance(event.day).add_revenue(harvest.revenue)
            season = totals.season[season_index_for_day(event.day)]
            season.add_revenue(harvest.revenue)
            season.harvests.add(harvest.harvest_yield.min, harvest.harvest_yield.max)

    for season in totals.season:
        totals.year.absorb(season)

    logger.debug(
        "Updated %s year %d: %d harvest days, profit %s",
        farm.kind,
        farm.year_index,
        len(farm.harvests),
        totals.year.get_profit(),
    )

    if propagate:
        next_year = state.next_year(farm.year_index)
        if next_year is not None:
            update(state, next_year.farm(farm.kind), full_update=True)
