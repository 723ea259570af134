"""Core year-by-year deterministic scenario projection."""

from __future__ import annotations

from dataclasses import dataclass

from .fund_year import FundYearResult, YearlyCosts, compute_fund_year
from .schema import Scenario


@dataclass(slots=True, frozen=True)
class ScenarioYearResult:
    year: int
    funds: tuple[FundYearResult, ...]
    total_start_value: float
    total_gross_return: float
    total_costs: YearlyCosts
    total_end_value_before_costs: float
    total_end_value_after_costs: float
    total_net_return: float
    cumulative_value: float
    exit_cost: float
    exit_cost_pct: float
    value_after_exit: float


@dataclass(slots=True, frozen=True)
class ScenarioProjection:
    scenario_id: str
    scenario_name: str
    initial_investment: float
    years: tuple[ScenarioYearResult, ...]
    final_value: float
    total_return: float
    total_return_pct: float
    total_costs_paid: float


@dataclass(slots=True, frozen=True)
class ExitValue:
    value: float
    exit_cost: float
    net_value: float


def _aggregate_year(year: int, fund_results: tuple[FundYearResult, ...]) -> ScenarioYearResult:
    total_costs = sum((r.costs for r in fund_results), YearlyCosts())
    total_start_value = sum(r.start_value for r in fund_results)
    total_end_value_after_costs = sum(r.end_value_after_costs for r in fund_results)
    exit_cost = sum(r.exit_cost for r in fund_results)
    # Weighted across funds; display only.
    exit_cost_pct = exit_cost / total_end_value_after_costs * 100.0 if total_end_value_after_costs > 0 else 0.0
    return ScenarioYearResult(
        year=year,
        funds=fund_results,
        total_start_value=total_start_value,
        total_gross_return=sum(r.gross_return for r in fund_results),
        total_costs=total_costs,
        total_end_value_before_costs=sum(r.end_value_before_costs for r in fund_results),
        total_end_value_after_costs=total_end_value_after_costs,
        total_net_return=total_end_value_after_costs - total_start_value,
        cumulative_value=total_end_value_after_costs,
        exit_cost=exit_cost,
        exit_cost_pct=exit_cost_pct,
        value_after_exit=sum(r.value_after_exit for r in fund_results),
    )


def _advance_year(
    scenario: Scenario,
    year: int,
    fund_values: tuple[float, ...],
) -> tuple[ScenarioYearResult, tuple[float, ...]]:
    """Run one year for every fund and return the result plus next year's start values."""
    fund_results = tuple(
        compute_fund_year(fund, year, start_value, scenario.exit_costs)
        for fund, start_value in zip(scenario.funds, fund_values)
    )
    next_values = tuple(result.end_value_after_costs for result in fund_results)
    return _aggregate_year(year, fund_results), next_values


def project_scenario(scenario: Scenario, time_horizon: int) -> ScenarioProjection:
    """Project every fund of ``scenario`` for years 1..``time_horizon``.

    Running fund values are aligned with ``scenario.funds`` and replaced, not
    mutated, on every step, so year N+1 always starts from year N's end value
    after costs.
    """
    initial_investment = sum(fund.unit_price * fund.quantity for fund in scenario.funds)

    fund_values = tuple(fund.unit_price * fund.quantity for fund in scenario.funds)
    years: list[ScenarioYearResult] = []
    for year in range(1, time_horizon + 1):
        year_result, fund_values = _advance_year(scenario, year, fund_values)
        years.append(year_result)

    total_costs_paid = sum(row.total_costs.total_costs for row in years)
    final_value = years[-1].total_end_value_after_costs if years else 0.0
    total_return = final_value - initial_investment
    total_return_pct = total_return / initial_investment * 100.0 if initial_investment > 0 else 0.0

    return ScenarioProjection(
        scenario_id=scenario.id,
        scenario_name=scenario.name,
        initial_investment=initial_investment,
        years=tuple(years),
        final_value=final_value,
        total_return=total_return,
        total_return_pct=total_return_pct,
        total_costs_paid=total_costs_paid,
    )


def calculate_exit_value(projection: ScenarioProjection, exit_year: int) -> ExitValue:
    """Value, exit cost and net proceeds when withdrawing everything in ``exit_year``."""
    for row in projection.years:
        if row.year == exit_year:
            return ExitValue(
                value=row.total_end_value_after_costs,
                exit_cost=row.exit_cost,
                net_value=row.value_after_exit,
            )
    return ExitValue(value=0.0, exit_cost=0.0, net_value=0.0)
