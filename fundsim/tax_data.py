"""Capital-gains exemption reference data per jurisdiction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(slots=True, frozen=True)
class TaxRules:
    base_exemption: float
    carryover_per_year: float
    max_carryover: float


DEFAULT_JURISDICTION: Final[str] = "BE"

# Annual exemption on realized gains; unused years add to a capped carryover.
JURISDICTION_RULES: Final[dict[str, TaxRules]] = {
    "BE": TaxRules(base_exemption=10_000.0, carryover_per_year=1_000.0, max_carryover=5_000.0),
    # No exemption at all: every realized euro is taxable.
    "FLAT": TaxRules(base_exemption=0.0, carryover_per_year=0.0, max_carryover=0.0),
}

DEFAULT_TAX_RATE_PCT: Final[float] = 30.0
