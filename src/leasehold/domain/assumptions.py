# src/leasehold/domain/assumptions.py
from pydantic import BaseModel, ConfigDict, Field


class ValuationAssumptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    deferment_rate_pct: float = Field(default=5.0, gt=0, lt=100)
    additional_years: int = Field(default=90, ge=0)
    wait_horizon_years: int = Field(default=3, ge=1)
