"""Plain-text report generation."""

from __future__ import annotations

from dataclasses import asdict
import json
from pathlib import Path

from .charts import build_chart_payload, comparison_rows, yearly_breakdown_rows
from .simulation import ScenarioResult, SimulationResult

# Swap US grouping for the Belgian/Dutch one: 1,234.56 -> 1.234,56
_SEPARATORS = str.maketrans({",": ".", ".": ","})


def format_currency(value: float) -> str:
    amount = f"{abs(value):,.2f}".translate(_SEPARATORS)
    sign = "-" if value < 0 and round(abs(value), 2) > 0 else ""
    return f"€ {sign}{amount}"


def format_percentage(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def _signed(value: float) -> str:
    return f"+{format_currency(value)}" if value >= 0 else format_currency(value)


def _scenario_section(item: ScenarioResult) -> list[str]:
    projection = item.projection
    allocation = item.allocation
    lines = [
        f"Scenario: {projection.scenario_name} ({projection.scenario_id})",
        f"  Allocated: {format_currency(allocation.allocated)} "
        f"({format_percentage(allocation.allocation_pct, 1)} of initial capital, "
        f"remaining {format_currency(allocation.remaining)})",
        f"  Initial investment: {format_currency(projection.initial_investment)}",
        f"  Final value: {format_currency(projection.final_value)}",
        f"  Total return: {_signed(projection.total_return)} ({format_percentage(projection.total_return_pct, 1)})",
        f"  Total costs paid: {format_currency(projection.total_costs_paid)}",
        f"  Total tax paid: {format_currency(item.tax.total_tax_paid)}",
        f"  Exemption used: {format_currency(item.tax.total_exemption_used)}",
        f"  Final value after tax: {format_currency(item.final_value_after_tax)}",
    ]
    if allocation.is_over_allocated:
        lines.append("  Warning: allocated more than the initial capital")
    return lines


def _yearly_table(item: ScenarioResult) -> list[str]:
    header = f"  {'Year':>4}  {'Start':>16}  {'Costs':>14}  {'End':>16}  {'Exit cost':>14}  {'Tax due':>14}"
    lines = [header]
    for row in yearly_breakdown_rows(item.projection, item.tax):
        marker = "*" if row["isRealizationYear"] else " "
        lines.append(
            f" {marker}{row['year']:>4}  {format_currency(row['startValue']):>16}  "
            f"{format_currency(row['totalCosts']):>14}  {format_currency(row['endValue']):>16}  "
            f"{format_currency(row['exitCost']):>14}  {format_currency(row['taxDue']):>14}"
        )
    return lines


def render_summary(result: SimulationResult, *, yearly: bool = False) -> str:
    lines = [
        f"Initial capital: {format_currency(result.initial_capital)}",
        f"Time horizon: {result.time_horizon} years",
        f"Scenarios: {len(result.scenarios)}",
    ]
    for item in result.scenarios:
        lines.append("")
        lines.extend(_scenario_section(item))
        if yearly:
            lines.extend(_yearly_table(item))
    return "\n".join(lines) + "\n"


def result_payload(result: SimulationResult) -> dict[str, object]:
    return {
        "initial_capital": result.initial_capital,
        "time_horizon": result.time_horizon,
        "comparison": comparison_rows(result),
        "scenarios": [
            {
                "projection": asdict(item.projection),
                "tax": asdict(item.tax),
                "allocation": asdict(item.allocation),
                "charts": build_chart_payload(item.projection, item.tax),
            }
            for item in result.scenarios
        ],
    }


def write_json(path: str | Path, result: SimulationResult) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(result_payload(result), indent=2), encoding="utf-8")
