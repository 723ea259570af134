"""Allocated vs. remaining capital per scenario."""

from __future__ import annotations

from dataclasses import dataclass

from .schema import Scenario

FULLY_ALLOCATED_TOLERANCE = 0.01


@dataclass(slots=True, frozen=True)
class AllocationSummary:
    initial_capital: float
    allocated: float
    remaining: float
    allocation_pct: float

    @property
    def is_over_allocated(self) -> bool:
        return self.remaining < 0

    @property
    def is_fully_allocated(self) -> bool:
        return abs(self.remaining) < FULLY_ALLOCATED_TOLERANCE


def summarize_allocation(scenario: Scenario, initial_capital: float) -> AllocationSummary:
    allocated = sum(fund.unit_price * fund.quantity for fund in scenario.funds)
    return AllocationSummary(
        initial_capital=initial_capital,
        allocated=allocated,
        remaining=initial_capital - allocated,
        allocation_pct=allocated / initial_capital * 100.0 if initial_capital > 0 else 0.0,
    )
