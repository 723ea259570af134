"""Chart series and table rows for presenting projections."""

from __future__ import annotations

from .engine import ScenarioProjection
from .simulation import SimulationResult
from .tax import TaxProjection, TaxYearResult


def _tax_by_year(tax_projection: TaxProjection | None) -> dict[int, TaxYearResult]:
    if tax_projection is None:
        return {}
    return {row.year: row for row in tax_projection.years}


def _fund_series(projection: ScenarioProjection) -> list[dict[str, object]]:
    if not projection.years:
        return []
    first = projection.years[0]
    series: dict[str, dict[str, object]] = {}
    for fund in first.funds:
        series[fund.fund_id] = {"fundId": fund.fund_id, "fundName": fund.fund_name, "values": [fund.start_value]}
    for row in projection.years:
        for fund in row.funds:
            entry = series.get(fund.fund_id)
            if entry is not None:
                entry["values"].append(fund.end_value_after_costs)
    return list(series.values())


def build_chart_payload(
    projection: ScenarioProjection,
    tax_projection: TaxProjection | None = None,
) -> dict[str, object]:
    labels = ["Start"] + [f"Year {row.year}" for row in projection.years]
    payload: dict[str, object] = {
        "labels": labels,
        "totalValues": [projection.initial_investment] + [row.cumulative_value for row in projection.years],
        "fundValues": _fund_series(projection),
    }

    if tax_projection is not None:
        by_year = _tax_by_year(tax_projection)
        payload["taxDue"] = [by_year[row.year].tax_due if row.year in by_year else 0.0 for row in projection.years]
        payload["unrealizedGains"] = [
            by_year[row.year].cumulative_unrealized_gains if row.year in by_year else 0.0
            for row in projection.years
        ]
    return payload


def yearly_breakdown_rows(
    projection: ScenarioProjection,
    tax_projection: TaxProjection | None = None,
) -> list[dict[str, object]]:
    by_year = _tax_by_year(tax_projection)
    rows: list[dict[str, object]] = []
    for year in projection.years:
        row: dict[str, object] = {
            "year": year.year,
            "startValue": year.total_start_value,
            "grossReturn": year.total_gross_return,
            "totalCosts": year.total_costs.total_costs,
            "netReturn": year.total_net_return,
            "endValue": year.total_end_value_after_costs,
            "exitCostPct": year.exit_cost_pct,
            "exitCost": year.exit_cost,
            "valueAfterExit": year.value_after_exit,
            "funds": [
                {
                    "fundId": fund.fund_id,
                    "fundName": fund.fund_name,
                    "startValue": fund.start_value,
                    "grossReturn": fund.gross_return,
                    "totalCosts": fund.costs.total_costs,
                    "netReturn": fund.net_return,
                    "endValue": fund.end_value_after_costs,
                    "exitCost": fund.exit_cost,
                }
                for fund in year.funds
            ],
        }
        tax_year = by_year.get(year.year)
        if tax_projection is not None:
            tax_due = tax_year.tax_due if tax_year else 0.0
            row["isRealizationYear"] = tax_year.is_realization_year if tax_year else False
            row["unrealizedGains"] = tax_year.cumulative_unrealized_gains if tax_year else 0.0
            row["realizedGains"] = tax_year.realized_gains if tax_year else 0.0
            row["taxDue"] = tax_due
            row["netAfterTax"] = year.value_after_exit - tax_due
        rows.append(row)
    return rows


def comparison_rows(result: SimulationResult) -> list[dict[str, object]]:
    return [
        {
            "scenarioId": item.projection.scenario_id,
            "scenarioName": item.projection.scenario_name,
            "initialInvestment": item.projection.initial_investment,
            "finalValue": item.projection.final_value,
            "totalReturn": item.projection.total_return,
            "totalReturnPct": item.projection.total_return_pct,
            "totalCostsPaid": item.projection.total_costs_paid,
            "totalTaxPaid": item.tax.total_tax_paid,
            "finalValueAfterTax": item.final_value_after_tax,
        }
        for item in result.scenarios
    ]
