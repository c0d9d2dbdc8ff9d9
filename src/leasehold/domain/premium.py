# src/leasehold/domain/premium.py
from __future__ import annotations

import math
from dataclasses import dataclass

from leasehold.domain.errors import InvalidInput
from leasehold.domain.money import round_currency

# Marriage value is only payable on leases with fewer than this many years left.
MARRIAGE_VALUE_THRESHOLD_YEARS = 80
FREEHOLDER_MARRIAGE_SHARE = 0.5


@dataclass(frozen=True)
class ValuationInput:
    property_value: float      # current (long lease / freehold) value
    remaining_years: int       # years left on the lease
    annual_ground_rent: float  # ground rent per year
    deferment_rate_pct: float  # e.g. 5.0 for 5%

    def validate(self) -> None:
        for name in ("property_value", "annual_ground_rent", "deferment_rate_pct"):
            v = getattr(self, name)
            if not isinstance(v, (int, float)) or not math.isfinite(v):
                raise InvalidInput(f"{name} must be a finite number, got {v!r}")
        if self.property_value < 0:
            raise InvalidInput("property_value must be >= 0")
        if self.annual_ground_rent < 0:
            raise InvalidInput("annual_ground_rent must be >= 0")
        years = self.remaining_years
        if (
            not isinstance(years, (int, float))
            or not math.isfinite(years)
            or int(years) != years
            or years < 1
        ):
            raise InvalidInput(f"remaining_years must be a whole number >= 1, got {self.remaining_years!r}")
        if not 0 < self.deferment_rate_pct < 100:
            raise InvalidInput(f"deferment_rate_pct must be between 0 and 100 (exclusive), got {self.deferment_rate_pct}")


@dataclass(frozen=True)
class PremiumBreakdown:
    total: float
    marriage_value: float
    grc: float  # ground rent capitalisation
    pvc: float  # present value of the reversion

    def rounded(self) -> dict[str, int]:
        return {
            "total": round_currency(self.total),
            "marriage_value": round_currency(self.marriage_value),
            "grc": round_currency(self.grc),
            "pvc": round_currency(self.pvc),
        }


def capitalise_ground_rent(annual_ground_rent: float, rate: float, years: int) -> float:
    if annual_ground_rent == 0:
        return 0.0
    return annual_ground_rent * (1 - (1 + rate) ** -years) / rate


def reversion_value(property_value: float, rate: float, years: int) -> float:
    return property_value * (1 + rate) ** -years


def marriage_value(
    property_value: float,
    relativity: float,
    freeholder_interest: float,
    remaining_years: int,
) -> float:
    """
    Freeholder's half of the gain from merging the interests.

    Before: existing lease (value * relativity) + freeholder's interest (grc + pvc).
    After: extended lease at full value.
    Zero at or above the 80-year threshold.
    """
    if remaining_years >= MARRIAGE_VALUE_THRESHOLD_YEARS:
        return 0.0
    existing_lease = property_value * relativity
    gain = property_value - (existing_lease + freeholder_interest)
    return FREEHOLDER_MARRIAGE_SHARE * max(0.0, gain)


class PremiumCalculator:
    def compute(self, input: ValuationInput, relativity: float) -> PremiumBreakdown:
        input.validate()
        if not isinstance(relativity, (int, float)) or not math.isfinite(relativity):
            raise InvalidInput(f"relativity must be a finite number, got {relativity!r}")
        if not 0 < relativity <= 1:
            raise InvalidInput(f"relativity must be in (0, 1], got {relativity}")

        r = input.deferment_rate_pct / 100
        n = int(input.remaining_years)

        grc = capitalise_ground_rent(input.annual_ground_rent, r, n)
        pvc = reversion_value(input.property_value, r, n)
        mv = marriage_value(input.property_value, relativity, grc + pvc, n)

        return PremiumBreakdown(
            total=grc + pvc + mv,
            marriage_value=mv,
            grc=grc,
            pvc=pvc,
        )


_calculator = PremiumCalculator()


def compute_premium(input: ValuationInput, relativity: float) -> PremiumBreakdown:
    return _calculator.compute(input, relativity)
