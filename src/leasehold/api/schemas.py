# src/leasehold/api/schemas.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict


# --------------------------------------------
# Quote
# --------------------------------------------

PropertyTypeName = Literal["House", "Flat"]


class QuoteRequest(BaseModel):
    """
    Request for /quote.

    Numbers may arrive as strings straight from the input form
    ("500,000", "£500", "5%"); validation.py normalizes them.
    """
    model_config = ConfigDict(extra="allow")

    property_value: float | str
    remaining_years: int | str
    annual_ground_rent: float | str = 0.0
    property_type: str = "Flat"

    deferment_rate_pct: float | str | None = None
    additional_years: int | None = None


class PremiumOut(BaseModel):
    total: int
    marriage_value: int
    grc: int
    pvc: int


class ForecastOut(BaseModel):
    forecast_value: int
    value_increase: int
    percent_increase: float
    new_lease_years: int


class WaitPointOut(BaseModel):
    remaining_years: int
    total_premium: int


class QuoteResponse(BaseModel):
    property_value: float
    remaining_years: int
    annual_ground_rent: float
    deferment_rate_pct: float
    property_type: PropertyTypeName

    relativity: float
    premium: PremiumOut
    forecast: ForecastOut
    current_lease_value: int
    equity_gain: int
    wait: list[WaitPointOut]


class RelativityOut(BaseModel):
    years: int
    relativity: float
