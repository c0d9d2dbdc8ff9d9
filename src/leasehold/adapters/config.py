# src/leasehold/adapters/config.py
import math
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from leasehold.domain.assumptions import ValuationAssumptions


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # Valuation defaults (passed into the engine, never read by it)
    DEFERMENT_RATE_PCT: float = Field(default=5.0)
    EXTENSION_YEARS: int = Field(default=90)
    WAIT_HORIZON_YEARS: int = Field(default=3)

    # -----------------------------
    # Input caps for user-entered values
    # -----------------------------
    MAX_LEASE_YEARS: int = Field(default=999)
    MAX_GROUND_RENT: float = Field(default=10_000.0)
    MAX_PROPERTY_VALUE: float = Field(default=100_000_000.0)

    model_config = SettingsConfigDict(
        env_prefix="LEASEHOLD_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("DEFERMENT_RATE_PCT", mode="before")
    @classmethod
    def _to_percent(cls, v: Any) -> Any:
        if v is None:
            return v
        explicit_pct = False
        if isinstance(v, str):
            v = v.strip()
            explicit_pct = v.endswith("%")
            v = v.replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("deferment rate must be numeric or percent-like") from err
        # "0.5%" stays 0.5; a bare 0.05 is a fraction
        if not explicit_pct and 0 < f < 1.0:
            f = f * 100.0
        if not math.isfinite(f) or f <= 0 or f >= 100:
            raise ValueError("deferment rate must be between 0 and 100")
        return f

    @field_validator("EXTENSION_YEARS", "WAIT_HORIZON_YEARS", "MAX_LEASE_YEARS", mode="before")
    @classmethod
    def _positive_years(cls, v: Any) -> Any:
        i = int(v)
        if i <= 0:
            raise ValueError("year settings must be > 0")
        return i

    def assumptions(self) -> ValuationAssumptions:
        return ValuationAssumptions(
            deferment_rate_pct=self.DEFERMENT_RATE_PCT,
            additional_years=self.EXTENSION_YEARS,
            wait_horizon_years=self.WAIT_HORIZON_YEARS,
        )


config = AppConfig()
