from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from leasehold.adapters.logging_utils import get_logger, log_context
from leasehold.domain.assumptions import ValuationAssumptions
from leasehold.domain.forecast import ForecastResult, PropertyType, project_forecast
from leasehold.domain.money import round_currency
from leasehold.domain.premium import PremiumBreakdown, ValuationInput, compute_premium
from leasehold.domain.relativity import RelativityTable, default_table

logger = get_logger(__name__)


@dataclass(frozen=True)
class WaitPoint:
    remaining_years: int
    total_premium: float


@dataclass(frozen=True)
class ValuationResult:
    inputs: ValuationInput
    property_type: PropertyType
    relativity: float
    premium: PremiumBreakdown
    forecast: ForecastResult
    current_lease_value: int
    equity_gain: int
    wait: tuple[WaitPoint, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Rounded figures, as rendered by the presentation layer."""
        return {
            "property_value": self.inputs.property_value,
            "remaining_years": self.inputs.remaining_years,
            "annual_ground_rent": self.inputs.annual_ground_rent,
            "deferment_rate_pct": self.inputs.deferment_rate_pct,
            "property_type": self.property_type.value,
            "relativity": self.relativity,
            "premium": self.premium.rounded(),
            "forecast": {
                "forecast_value": self.forecast.forecast_value,
                "value_increase": self.forecast.value_increase,
                "percent_increase": self.forecast.percent_increase,
                "new_lease_years": self.forecast.new_lease_years,
            },
            "current_lease_value": self.current_lease_value,
            "equity_gain": self.equity_gain,
            "wait": [
                {"remaining_years": w.remaining_years, "total_premium": round_currency(w.total_premium)}
                for w in self.wait
            ],
        }


def project_wait(
    inputs: ValuationInput,
    horizon_years: int,
    table: RelativityTable = default_table,
) -> tuple[WaitPoint, ...]:
    """
    Premium if the extension is put off by 0..horizon_years-1 years.
    The lease never drops below one year remaining.
    """
    points: list[WaitPoint] = []
    for i in range(horizon_years):
        years_left = max(inputs.remaining_years - i, 1)
        shifted = ValuationInput(
            property_value=inputs.property_value,
            remaining_years=years_left,
            annual_ground_rent=inputs.annual_ground_rent,
            deferment_rate_pct=inputs.deferment_rate_pct,
        )
        premium = compute_premium(shifted, table.lookup(years_left))
        points.append(WaitPoint(remaining_years=years_left, total_premium=premium.total))
    return tuple(points)


def run_valuation(
    property_value: float,
    remaining_years: int,
    annual_ground_rent: float,
    property_type: PropertyType | str = PropertyType.FLAT,
    assumptions: ValuationAssumptions | None = None,
    *,
    table: RelativityTable = default_table,
) -> ValuationResult:
    """
    Full result set for one lease:
      relativity -> premium breakdown, forecast value, current lease value,
      equity gain and the wait projection.
    """
    assumptions = assumptions or ValuationAssumptions()
    inputs = ValuationInput(
        property_value=property_value,
        remaining_years=remaining_years,
        annual_ground_rent=annual_ground_rent,
        deferment_rate_pct=assumptions.deferment_rate_pct,
    )
    # reject before the relativity lookup clamps anything
    inputs.validate()

    relativity = table.lookup(remaining_years)
    premium = compute_premium(inputs, relativity)
    forecast = project_forecast(
        property_value,
        remaining_years,
        property_type,
        assumptions.additional_years,
    )
    wait = project_wait(inputs, assumptions.wait_horizon_years, table)

    result = ValuationResult(
        inputs=inputs,
        property_type=PropertyType(property_type),
        relativity=relativity,
        premium=premium,
        forecast=forecast,
        current_lease_value=round_currency(property_value * relativity),
        equity_gain=forecast.forecast_value - round_currency(property_value),
        wait=wait,
    )

    logger.debug(
        "valuation computed",
        extra=log_context(
            remaining_years=remaining_years,
            relativity=relativity,
            total_premium=premium.total,
            forecast_value=forecast.forecast_value,
        ),
    )
    return result
