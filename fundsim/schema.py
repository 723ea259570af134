"""Simulation schema dataclasses and JSON loading."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import json
from pathlib import Path
from typing import Any

from .tax_data import DEFAULT_JURISDICTION, DEFAULT_TAX_RATE_PCT


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into schema objects."""


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"{path}: expected array")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _optional(data: dict[str, Any], key: str, default: Any = None) -> Any:
    return data.get(key, default)


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"{path}: expected number")
    return float(value)


def _integer(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"{path}: expected integer")
    return value


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise SchemaError(f"{path}: expected string")
    return value


def _optional_rate(data: dict[str, Any], key: str, path: str) -> float:
    # Missing or null rates mean "no cost".
    value = _optional(data, key)
    if value is None:
        return 0.0
    return _number(value, f"{path}.{key}")


@dataclass(slots=True, frozen=True)
class FundCosts:
    entry_fee_pct: float = 0.0
    management_fee_pct: float = 0.0
    ter_pct: float = 0.0
    transaction_cost_pct: float = 0.0
    performance_fee_pct: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "FundCosts":
        return cls(
            entry_fee_pct=_optional_rate(data, "entry_fee_pct", path),
            management_fee_pct=_optional_rate(data, "management_fee_pct", path),
            ter_pct=_optional_rate(data, "ter_pct", path),
            transaction_cost_pct=_optional_rate(data, "transaction_cost_pct", path),
            performance_fee_pct=_optional_rate(data, "performance_fee_pct", path),
        )


@dataclass(slots=True, frozen=True)
class ExitCost:
    year: int
    exit_fee_pct: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "ExitCost":
        return cls(
            year=_integer(_require(data, "year", path), f"{path}.year"),
            exit_fee_pct=_number(_require(data, "exit_fee_pct", path), f"{path}.exit_fee_pct"),
        )


def _exit_costs_from_list(raw: Any, path: str) -> tuple[ExitCost, ...]:
    return tuple(
        ExitCost.from_dict(_expect_dict(item, f"{path}[{idx}]"), f"{path}[{idx}]")
        for idx, item in enumerate(_expect_list(raw, path))
    )


@dataclass(slots=True, frozen=True)
class Fund:
    id: str
    name: str
    unit_price: float
    quantity: float
    yearly_return_pct: float
    costs: FundCosts = field(default_factory=FundCosts)
    exit_costs: tuple[ExitCost, ...] | None = None

    @property
    def allocation(self) -> float:
        return self.unit_price * self.quantity

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "Fund":
        exit_costs_raw = _optional(data, "exit_costs")
        exit_costs = None
        if exit_costs_raw is not None:
            exit_costs = _exit_costs_from_list(exit_costs_raw, f"{path}.exit_costs")
        return cls(
            id=_string(_require(data, "id", path), f"{path}.id"),
            name=str(_optional(data, "name", "New Fund")),
            unit_price=_number(_require(data, "unit_price", path), f"{path}.unit_price"),
            quantity=_number(_require(data, "quantity", path), f"{path}.quantity"),
            yearly_return_pct=_number(_require(data, "yearly_return_pct", path), f"{path}.yearly_return_pct"),
            costs=FundCosts.from_dict(_expect_dict(_optional(data, "costs", {}), f"{path}.costs"), f"{path}.costs"),
            exit_costs=exit_costs,
        )


@dataclass(slots=True, frozen=True)
class TaxSettings:
    tax_rate_pct: float = DEFAULT_TAX_RATE_PCT
    realization_years: tuple[int, ...] = ()
    jurisdiction: str = DEFAULT_JURISDICTION

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "tax_settings") -> "TaxSettings":
        years_raw = _expect_list(_optional(data, "realization_years", []), f"{path}.realization_years")
        return cls(
            tax_rate_pct=_number(_optional(data, "tax_rate_pct", DEFAULT_TAX_RATE_PCT), f"{path}.tax_rate_pct"),
            realization_years=tuple(
                _integer(item, f"{path}.realization_years[{idx}]") for idx, item in enumerate(years_raw)
            ),
            jurisdiction=str(_optional(data, "jurisdiction", DEFAULT_JURISDICTION)),
        )


@dataclass(slots=True, frozen=True)
class Scenario:
    id: str
    name: str
    funds: tuple[Fund, ...] = ()
    exit_costs: tuple[ExitCost, ...] = ()
    tax_settings: TaxSettings = field(default_factory=TaxSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "Scenario":
        return cls(
            id=_string(_require(data, "id", path), f"{path}.id"),
            name=str(_optional(data, "name", "")),
            funds=tuple(
                Fund.from_dict(_expect_dict(item, f"{path}.funds[{idx}]"), f"{path}.funds[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "funds", []), f"{path}.funds"))
            ),
            exit_costs=_exit_costs_from_list(_optional(data, "exit_costs", []), f"{path}.exit_costs"),
            tax_settings=TaxSettings.from_dict(
                _expect_dict(_optional(data, "tax_settings", {}), f"{path}.tax_settings"),
                f"{path}.tax_settings",
            ),
        )


@dataclass(slots=True, frozen=True)
class Simulation:
    initial_capital: float
    time_horizon: int
    scenarios: tuple[Scenario, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Simulation":
        return cls(
            initial_capital=_number(_optional(data, "initial_capital", 0.0), "simulation.initial_capital"),
            time_horizon=_integer(_require(data, "time_horizon", "simulation"), "simulation.time_horizon"),
            scenarios=tuple(
                Scenario.from_dict(_expect_dict(item, f"scenarios[{idx}]"), f"scenarios[{idx}]")
                for idx, item in enumerate(_expect_list(_require(data, "scenarios", "simulation"), "scenarios"))
            ),
        )


def _trim_exit_costs(schedule: tuple[ExitCost, ...], horizon: int) -> tuple[ExitCost, ...]:
    return tuple(entry for entry in schedule if entry.year <= horizon)


def with_time_horizon(simulation: Simulation, horizon: int) -> Simulation:
    """Return ``simulation`` with a new shared horizon.

    Exit-cost entries past the new horizon are dropped. Realization years are
    kept as entered; years past the horizon are never reached.
    """
    scenarios = []
    for scenario in simulation.scenarios:
        funds = tuple(
            fund if fund.exit_costs is None else replace(fund, exit_costs=_trim_exit_costs(fund.exit_costs, horizon))
            for fund in scenario.funds
        )
        scenarios.append(
            replace(scenario, funds=funds, exit_costs=_trim_exit_costs(scenario.exit_costs, horizon))
        )
    return replace(simulation, time_horizon=horizon, scenarios=tuple(scenarios))


def load_simulation(path: str | Path) -> Simulation:
    """Load simulation JSON into strongly-typed dataclasses."""
    source = Path(path)
    raw = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("simulation: root must be a JSON object")
    return Simulation.from_dict(raw)
