"""Single fund, single year cost and return computation."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable

from .schema import ExitCost, Fund


@dataclass(slots=True, frozen=True)
class YearlyCosts:
    entry_fee: float = 0.0
    management_fee: float = 0.0
    ter: float = 0.0
    transaction_cost: float = 0.0
    performance_fee: float = 0.0
    total_costs: float = 0.0

    def __add__(self, other: "YearlyCosts") -> "YearlyCosts":
        return YearlyCosts(
            entry_fee=self.entry_fee + other.entry_fee,
            management_fee=self.management_fee + other.management_fee,
            ter=self.ter + other.ter,
            transaction_cost=self.transaction_cost + other.transaction_cost,
            performance_fee=self.performance_fee + other.performance_fee,
            total_costs=self.total_costs + other.total_costs,
        )


@dataclass(slots=True, frozen=True)
class CostPercentages:
    entry_fee: float
    management_fee: float
    ter: float
    transaction_cost: float
    performance_fee: float
    total: float


@dataclass(slots=True, frozen=True)
class FundYearResult:
    year: int
    fund_id: str
    fund_name: str
    start_value: float
    gross_return: float
    gross_return_pct: float
    costs: YearlyCosts
    costs_pct: CostPercentages
    end_value_before_costs: float
    end_value_after_costs: float
    net_return: float
    net_return_pct: float
    exit_cost: float
    exit_cost_pct: float
    value_after_exit: float


def _rate(value: float | None) -> float:
    """Normalize a percentage rate: missing, NaN and negative rates count as zero."""
    if value is None or math.isnan(value):
        return 0.0
    return max(0.0, value)


def _share(amount: float, base: float) -> float:
    return amount / base * 100.0 if base > 0 else 0.0


def exit_cost_pct(schedule: Iterable[ExitCost] | None, year: int) -> float:
    """Return the exit fee percentage scheduled for ``year``, 0 when absent."""
    for entry in schedule or ():
        if entry.year == year:
            return _rate(entry.exit_fee_pct)
    return 0.0


def compute_fund_year(
    fund: Fund,
    year: int,
    start_value: float,
    exit_costs: Iterable[ExitCost] | None = None,
) -> FundYearResult:
    """Compute one fund's outcome for ``year`` starting from ``start_value``.

    Costs are applied in a fixed order because each one is a percentage of a
    different base:

    1. entry fee (year 1 only) on the start value, before growth;
    2. gross return on the value left after the entry fee;
    3. management fee, TER and transaction cost on the end value before costs;
    4. performance fee on the gross return, only when it is positive;
    5. exit cost on the end value after costs, from the fund's own schedule when
       it has one, otherwise from ``exit_costs``.
    """
    costs = fund.costs
    yearly_return_pct = 0.0 if math.isnan(fund.yearly_return_pct) else fund.yearly_return_pct
    entry_fee_pct = _rate(costs.entry_fee_pct)
    management_fee_pct = _rate(costs.management_fee_pct)
    ter_pct = _rate(costs.ter_pct)
    transaction_cost_pct = _rate(costs.transaction_cost_pct)
    performance_fee_pct = _rate(costs.performance_fee_pct)

    entry_fee = start_value * entry_fee_pct / 100.0 if year == 1 else 0.0
    value_after_entry = start_value - entry_fee

    gross_return = value_after_entry * yearly_return_pct / 100.0
    end_value_before_costs = value_after_entry + gross_return

    management_fee = end_value_before_costs * management_fee_pct / 100.0
    ter = end_value_before_costs * ter_pct / 100.0
    transaction_cost = end_value_before_costs * transaction_cost_pct / 100.0
    performance_fee = gross_return * performance_fee_pct / 100.0 if gross_return > 0 else 0.0

    total_costs = entry_fee + management_fee + ter + transaction_cost + performance_fee
    # Entry fee already left the position before growth.
    end_value_after_costs = end_value_before_costs - management_fee - ter - transaction_cost - performance_fee

    net_return = end_value_after_costs - start_value

    schedule = fund.exit_costs if fund.exit_costs is not None else exit_costs
    exit_pct = exit_cost_pct(schedule, year)
    exit_cost = end_value_after_costs * exit_pct / 100.0

    return FundYearResult(
        year=year,
        fund_id=fund.id,
        fund_name=fund.name,
        start_value=start_value,
        gross_return=gross_return,
        gross_return_pct=yearly_return_pct,
        costs=YearlyCosts(
            entry_fee=entry_fee,
            management_fee=management_fee,
            ter=ter,
            transaction_cost=transaction_cost,
            performance_fee=performance_fee,
            total_costs=total_costs,
        ),
        costs_pct=CostPercentages(
            entry_fee=entry_fee_pct,
            management_fee=management_fee_pct,
            ter=ter_pct,
            transaction_cost=transaction_cost_pct,
            performance_fee=performance_fee_pct,
            total=_share(total_costs, start_value),
        ),
        end_value_before_costs=end_value_before_costs,
        end_value_after_costs=end_value_after_costs,
        net_return=net_return,
        net_return_pct=_share(net_return, start_value),
        exit_cost=exit_cost,
        exit_cost_pct=exit_pct,
        value_after_exit=end_value_after_costs - exit_cost,
    )
