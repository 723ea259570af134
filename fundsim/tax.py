"""Capital-gains tax projection with an exemption carryover."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .engine import ScenarioProjection
from .schema import TaxSettings
from .tax_data import JURISDICTION_RULES, TaxRules


@dataclass(slots=True, frozen=True)
class TaxState:
    cumulative_unrealized_gains: float = 0.0
    carryover_exemption: float = 0.0


@dataclass(slots=True, frozen=True)
class TaxYearResult:
    year: int
    yearly_gain: float
    cumulative_unrealized_gains: float
    carryover_exemption: float
    available_exemption: float
    is_realization_year: bool
    realized_gains: float
    taxable_gains: float
    tax_due: float
    exemption_used: float


@dataclass(slots=True, frozen=True)
class TaxProjection:
    years: tuple[TaxYearResult, ...]
    total_tax_paid: float
    total_exemption_used: float


def rules_for_jurisdiction(code: str) -> TaxRules:
    try:
        return JURISDICTION_RULES[code]
    except KeyError:
        expected = ", ".join(sorted(JURISDICTION_RULES))
        raise ValueError(f"unsupported jurisdiction '{code}'; expected one of [{expected}]") from None


def step_tax_year(
    state: TaxState,
    *,
    year: int,
    yearly_gain: float,
    is_realization_year: bool,
    tax_rate_pct: float,
    rules: TaxRules,
) -> tuple[TaxState, TaxYearResult]:
    """Apply one year's gain to ``state`` and return the next state and the year's record.

    In a realization year with a positive accumulated balance the whole balance
    is sold: the exemption (base plus carryover) is applied, tax is charged on
    the remainder and both the balance and the carryover reset to zero. Any
    other year only accumulates the gain. The carryover grows in years without
    a realization; a realization year with a non-positive balance leaves it
    untouched.
    """
    cumulative = state.cumulative_unrealized_gains + yearly_gain
    carryover = state.carryover_exemption
    available_exemption = rules.base_exemption + carryover

    realized_gains = 0.0
    taxable_gains = 0.0
    tax_due = 0.0
    exemption_used = 0.0
    realized = is_realization_year and cumulative > 0

    if realized:
        realized_gains = cumulative
        exemption_used = min(realized_gains, available_exemption)
        taxable_gains = max(0.0, realized_gains - available_exemption)
        tax_due = taxable_gains * tax_rate_pct / 100.0
        cumulative = 0.0
        carryover = 0.0
    elif not is_realization_year:
        carryover = max(0.0, min(carryover + rules.carryover_per_year, rules.max_carryover))

    next_state = TaxState(cumulative_unrealized_gains=cumulative, carryover_exemption=carryover)
    return next_state, TaxYearResult(
        year=year,
        yearly_gain=yearly_gain,
        cumulative_unrealized_gains=0.0 if realized else cumulative,
        carryover_exemption=carryover,
        available_exemption=available_exemption,
        is_realization_year=is_realization_year,
        realized_gains=realized_gains,
        taxable_gains=taxable_gains,
        tax_due=tax_due,
        exemption_used=exemption_used,
    )


def project_tax_from_gains(
    yearly_gains: Iterable[tuple[int, float]],
    tax_settings: TaxSettings,
    rules: TaxRules | None = None,
) -> TaxProjection:
    """Run the tax state machine over ordered ``(year, gain)`` pairs.

    Without explicit ``rules`` the jurisdiction named in ``tax_settings`` applies.
    """
    if rules is None:
        rules = rules_for_jurisdiction(tax_settings.jurisdiction)
    realization_years = set(tax_settings.realization_years)

    state = TaxState()
    years: list[TaxYearResult] = []
    for year, gain in yearly_gains:
        state, row = step_tax_year(
            state,
            year=year,
            yearly_gain=gain,
            is_realization_year=year in realization_years,
            tax_rate_pct=tax_settings.tax_rate_pct,
            rules=rules,
        )
        years.append(row)

    return TaxProjection(
        years=tuple(years),
        total_tax_paid=sum(row.tax_due for row in years),
        total_exemption_used=sum(row.exemption_used for row in years),
    )


def project_tax(
    projection: ScenarioProjection,
    tax_settings: TaxSettings,
    rules: TaxRules | None = None,
) -> TaxProjection:
    """Compute realized gains, exemption usage and tax due for every projected year."""
    return project_tax_from_gains(
        ((row.year, row.total_net_return) for row in projection.years),
        tax_settings,
        rules,
    )
