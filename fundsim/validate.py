"""Semantic and cross-reference validation for simulations."""

from __future__ import annotations

from dataclasses import dataclass, field
import math

from .allocation import summarize_allocation
from .schema import ExitCost, Simulation
from .tax_data import JURISDICTION_RULES

MIN_TIME_HORIZON = 5
MAX_TIME_HORIZON = 30
MAX_SCENARIOS = 3
MAX_FUNDS_PER_SCENARIO = 5

COST_FIELDS = (
    "entry_fee_pct",
    "management_fee_pct",
    "ter_pct",
    "transaction_cost_pct",
    "performance_fee_pct",
)


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _check_range(result: ValidationResult, path: str, value: float, low: float, high: float) -> None:
    if math.isnan(value):
        result.errors.append(f"{path}: must be a number")
    elif value < low:
        result.errors.append(f"{path}: must be >= {low:g}")
    elif value > high:
        result.errors.append(f"{path}: must be <= {high:g}")


def _check_rate(result: ValidationResult, path: str, value: float) -> None:
    if math.isnan(value) or value < 0:
        result.warnings.append(f"{path}: negative or missing rate is treated as 0")


def _check_exit_costs(result: ValidationResult, path: str, schedule: tuple[ExitCost, ...], horizon: int) -> None:
    seen: set[int] = set()
    for idx, entry in enumerate(schedule):
        base = f"{path}[{idx}]"
        if entry.year in seen:
            result.errors.append(f"{base}.year: duplicate exit cost year {entry.year}")
        seen.add(entry.year)
        if entry.year < 1:
            result.errors.append(f"{base}.year: must be >= 1")
        elif entry.year > horizon:
            result.warnings.append(f"{base}.year: {entry.year} is beyond the time horizon 1-{horizon} and is ignored")
        _check_rate(result, f"{base}.exit_fee_pct", entry.exit_fee_pct)


def validate_simulation(simulation: Simulation) -> ValidationResult:
    result = ValidationResult()
    horizon = simulation.time_horizon

    _check_range(result, "time_horizon", horizon, MIN_TIME_HORIZON, MAX_TIME_HORIZON)
    if simulation.initial_capital < 0:
        result.errors.append("initial_capital: must be >= 0")
    if not simulation.scenarios:
        result.errors.append("scenarios: at least one scenario is required")
    if len(simulation.scenarios) > MAX_SCENARIOS:
        result.errors.append(f"scenarios: at most {MAX_SCENARIOS} scenarios are supported")

    scenario_ids: set[str] = set()
    for idx, scenario in enumerate(simulation.scenarios):
        base = f"scenarios[{idx}]"
        if scenario.id in scenario_ids:
            result.errors.append(f"{base}.id: duplicate scenario id '{scenario.id}'")
        scenario_ids.add(scenario.id)

        if not scenario.funds:
            result.warnings.append(f"{base}.funds: scenario '{scenario.name}' has no funds")
        if len(scenario.funds) > MAX_FUNDS_PER_SCENARIO:
            result.errors.append(f"{base}.funds: at most {MAX_FUNDS_PER_SCENARIO} funds are supported")

        fund_ids: set[str] = set()
        for fund_idx, fund in enumerate(scenario.funds):
            fund_base = f"{base}.funds[{fund_idx}]"
            if fund.id in fund_ids:
                result.errors.append(f"{fund_base}.id: duplicate fund id '{fund.id}'")
            fund_ids.add(fund.id)
            if fund.unit_price < 0:
                result.errors.append(f"{fund_base}.unit_price: must be >= 0")
            if fund.quantity < 0:
                result.errors.append(f"{fund_base}.quantity: must be >= 0")
            for name in COST_FIELDS:
                _check_rate(result, f"{fund_base}.costs.{name}", getattr(fund.costs, name))
            if fund.exit_costs is not None:
                _check_exit_costs(result, f"{fund_base}.exit_costs", fund.exit_costs, horizon)

        _check_exit_costs(result, f"{base}.exit_costs", scenario.exit_costs, horizon)

        tax = scenario.tax_settings
        _check_range(result, f"{base}.tax_settings.tax_rate_pct", tax.tax_rate_pct, 0, 100)
        if tax.jurisdiction not in JURISDICTION_RULES:
            expected = ", ".join(sorted(JURISDICTION_RULES))
            result.errors.append(
                f"{base}.tax_settings.jurisdiction: '{tax.jurisdiction}' is not valid; expected one of [{expected}]"
            )
        years = tax.realization_years
        if any(later <= earlier for earlier, later in zip(years, years[1:])):
            result.errors.append(f"{base}.tax_settings.realization_years: must be strictly ascending without duplicates")
        for year_idx, year in enumerate(years):
            year_path = f"{base}.tax_settings.realization_years[{year_idx}]"
            if year < 1:
                result.errors.append(f"{year_path}: must be >= 1")
            elif year > horizon:
                result.warnings.append(f"{year_path}: {year} is beyond the time horizon 1-{horizon} and is ignored")

        allocation = summarize_allocation(scenario, simulation.initial_capital)
        if allocation.is_over_allocated:
            result.warnings.append(
                f"{base}.funds: allocated {allocation.allocated:,.2f} exceeds initial capital "
                f"{allocation.initial_capital:,.2f}"
            )

    return result
