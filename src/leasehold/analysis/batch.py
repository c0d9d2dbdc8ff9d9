# src/leasehold/analysis/batch.py

from __future__ import annotations

import numpy as np
import pandas as pd

from leasehold.domain.assumptions import ValuationAssumptions
from leasehold.domain.errors import InvalidInput
from leasehold.domain.forecast import PropertyType
from leasehold.services.valuation import run_valuation

REQUIRED_COLUMNS = ("property_value", "remaining_years", "annual_ground_rent")

OUTPUT_COLUMNS = [
    "relativity",
    "grc",
    "pvc",
    "marriage_value",
    "total_premium",
    "forecast_value",
    "value_increase",
    "percent_increase",
    "current_lease_value",
]


def quote_frame(
    df: pd.DataFrame,
    assumptions: ValuationAssumptions | None = None,
) -> pd.DataFrame:
    """
    Quote every row of a DataFrame.

    Expected columns on df:
      - property_value
      - remaining_years
      - annual_ground_rent
      - property_type (optional, "House" / "Flat", defaults to Flat)

    Returns a copy of df with OUTPUT_COLUMNS appended. Any invalid row
    raises InvalidInput naming the row index.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidInput(f"missing columns: {', '.join(missing)}")

    assumptions = assumptions or ValuationAssumptions()

    if "property_type" in df.columns:
        ptypes = df["property_type"].fillna(PropertyType.FLAT.value).astype(str).str.strip().str.title()
    else:
        ptypes = pd.Series(PropertyType.FLAT.value, index=df.index)

    values = _numeric_column(df, "property_value")
    years = _numeric_column(df, "remaining_years")
    rents = _numeric_column(df, "annual_ground_rent")

    rows: list[list[float]] = []
    for idx, value, yrs, rent, ptype in zip(df.index, values, years, rents, ptypes):
        if not np.isfinite(yrs) or yrs != np.floor(yrs):
            raise InvalidInput(f"row {idx}: remaining_years must be a whole number")
        try:
            res = run_valuation(value, int(yrs), rent, ptype, assumptions)
        except InvalidInput as err:
            raise InvalidInput(f"row {idx}: {err}") from err

        p = res.premium.rounded()
        rows.append(
            [
                res.relativity,
                p["grc"],
                p["pvc"],
                p["marriage_value"],
                p["total"],
                res.forecast.forecast_value,
                res.forecast.value_increase,
                res.forecast.percent_increase,
                res.current_lease_value,
            ]
        )

    out = df.copy()
    results = pd.DataFrame(rows, columns=OUTPUT_COLUMNS, index=df.index)
    for col in OUTPUT_COLUMNS:
        out[col] = results[col]
    return out


def _numeric_column(df: pd.DataFrame, col: str) -> np.ndarray:
    # blanks stay NaN and are rejected per row by the engine
    coerced = pd.to_numeric(df[col], errors="coerce")
    bad = coerced.isna() & df[col].notna()
    if bad.any():
        idx = bad[bad].index[0]
        raise InvalidInput(f"row {idx}: {col} must be numeric, got {df.at[idx, col]!r}")
    return coerced.to_numpy(dtype=float)
