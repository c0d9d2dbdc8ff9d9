# src/leasehold/domain/forecast.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from leasehold.domain.errors import InvalidInput
from leasehold.domain.money import round_currency

MIN_YEARS = 1
MAX_YEARS = 120
PIVOT_YEARS = 80
PIVOT_UPLIFT_PCT = 5.0
MAX_UPLIFT_PCT = 30.0
HOUSE_MULTIPLIER = 1.05
DEFAULT_ADDITIONAL_YEARS = 90


class PropertyType(str, Enum):
    HOUSE = "House"
    FLAT = "Flat"


@dataclass(frozen=True)
class ForecastResult:
    forecast_value: int
    value_increase: int
    percent_increase: float  # one decimal place, for display
    uplift_pct: float        # full precision
    new_lease_years: int


def lower_branch_pct(years: float) -> float:
    # 5% at 80 years rising linearly to 30% at 1 year
    span = PIVOT_YEARS - MIN_YEARS
    return PIVOT_UPLIFT_PCT + ((PIVOT_YEARS - years) / span) * (MAX_UPLIFT_PCT - PIVOT_UPLIFT_PCT)


def upper_branch_pct(years: float) -> float:
    # 5% at 80 years falling linearly to 0% at 120 years
    span = MAX_YEARS - PIVOT_YEARS
    return ((MAX_YEARS - years) / span) * PIVOT_UPLIFT_PCT


def uplift_pct(remaining_years: float, property_type: PropertyType | str) -> float:
    ptype = PropertyType(property_type)
    if not isinstance(remaining_years, (int, float)) or not math.isfinite(remaining_years):
        raise InvalidInput(f"remaining_years must be a finite number, got {remaining_years!r}")
    years = min(max(remaining_years, MIN_YEARS), MAX_YEARS)

    if years <= PIVOT_YEARS:
        percent = lower_branch_pct(years)
    else:
        percent = upper_branch_pct(years)

    if ptype is PropertyType.HOUSE:
        percent *= HOUSE_MULTIPLIER
    return percent


class ForecastModel:
    def project(
        self,
        current_value: float,
        remaining_years: int,
        property_type: PropertyType | str,
        additional_years: int = DEFAULT_ADDITIONAL_YEARS,
    ) -> ForecastResult:
        if not isinstance(current_value, (int, float)) or not math.isfinite(current_value):
            raise InvalidInput(f"current_value must be a finite number, got {current_value!r}")
        if current_value < 0:
            raise InvalidInput("current_value must be >= 0")
        if additional_years < 0:
            raise InvalidInput("additional_years must be >= 0")
        try:
            ptype = PropertyType(property_type)
        except ValueError as err:
            raise InvalidInput(f"unknown property_type: {property_type!r}") from err

        percent = uplift_pct(remaining_years, ptype)
        increase = round_currency(current_value * percent / 100)

        return ForecastResult(
            forecast_value=round_currency(current_value + increase),
            value_increase=increase,
            percent_increase=round(percent, 1),
            uplift_pct=percent,
            new_lease_years=int(remaining_years) + int(additional_years),
        )


_model = ForecastModel()


def project_forecast(
    current_value: float,
    remaining_years: int,
    property_type: PropertyType | str,
    additional_years: int = DEFAULT_ADDITIONAL_YEARS,
) -> ForecastResult:
    return _model.project(current_value, remaining_years, property_type, additional_years)
