"""Simulation orchestration."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .allocation import AllocationSummary, summarize_allocation
from .engine import ScenarioProjection, project_scenario
from .schema import Scenario, Simulation, with_time_horizon
from .tax import TaxProjection, project_tax, rules_for_jurisdiction

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ScenarioResult:
    scenario: Scenario
    projection: ScenarioProjection
    tax: TaxProjection
    allocation: AllocationSummary

    @property
    def final_value_after_tax(self) -> float:
        return self.projection.final_value - self.tax.total_tax_paid


@dataclass(slots=True, frozen=True)
class SimulationResult:
    initial_capital: float
    time_horizon: int
    scenarios: tuple[ScenarioResult, ...]


def run_scenario(scenario: Scenario, time_horizon: int, initial_capital: float = 0.0) -> ScenarioResult:
    rules = rules_for_jurisdiction(scenario.tax_settings.jurisdiction)
    projection = project_scenario(scenario, time_horizon)
    tax = project_tax(projection, scenario.tax_settings, rules)
    logger.debug(
        "scenario %s: %d funds over %d years, final value %.2f, costs %.2f, tax %.2f",
        scenario.id,
        len(scenario.funds),
        time_horizon,
        projection.final_value,
        projection.total_costs_paid,
        tax.total_tax_paid,
    )
    return ScenarioResult(
        scenario=scenario,
        projection=projection,
        tax=tax,
        allocation=summarize_allocation(scenario, initial_capital),
    )


def run_simulation(simulation: Simulation, horizon_override: int | None = None) -> SimulationResult:
    """Project and tax every scenario with the shared time horizon.

    Scenarios never read each other's state, so each one is run on its own and
    the results keep the input order.
    """
    if horizon_override is not None:
        simulation = with_time_horizon(simulation, horizon_override)
    horizon = simulation.time_horizon
    results = tuple(
        run_scenario(scenario, horizon, simulation.initial_capital)
        for scenario in simulation.scenarios
    )
    return SimulationResult(
        initial_capital=simulation.initial_capital,
        time_horizon=horizon,
        scenarios=results,
    )
