# src/leasehold/services/validation.py

import math
from typing import Any

from leasehold.adapters.config import config
from leasehold.domain.errors import InvalidInput
from leasehold.domain.forecast import PropertyType

# Fields a quote cannot be computed without
REQUIRED_CORE_FIELDS = [
    "property_value",
    "remaining_years",
    "annual_ground_rent",
]

DEFAULT_PROPERTY_TYPE = PropertyType.FLAT


def _to_num(val: Any, field_name: str) -> float:
    """
    Coerce user-entered values like:
      - 500000
      - "500,000"
      - "£500,000"
      - "5%"
    into a finite float.
    """
    if val is None:
        raise InvalidInput(f"Missing required numeric field: {field_name}")
    if isinstance(val, bool):
        raise InvalidInput(f"Invalid type for {field_name}: bool")
    if isinstance(val, (int, float)):
        f = float(val)
    elif isinstance(val, str):
        s = val.strip().replace(",", "").replace("£", "")
        if s.endswith("%"):
            s = s[:-1]
        if not s:
            raise InvalidInput(f"Missing required numeric field: {field_name}")
        try:
            f = float(s)
        except ValueError as err:
            raise InvalidInput(f"Invalid number for {field_name}: {val!r}") from err
    else:
        raise InvalidInput(f"Invalid type for {field_name}: {type(val)}")
    if not math.isfinite(f):
        raise InvalidInput(f"{field_name} must be a finite number, got {val!r}")
    return f


def normalize_rate_pct(val: Any) -> float:
    """
    Deferment rate as a percentage:
      5, "5", "5%" -> 5.0
      0.05         -> 5.0
      "0.5%"       -> 0.5 (an explicit percent sign is never rescaled)
    """
    f = _to_num(val, "deferment_rate_pct")
    explicit_pct = isinstance(val, str) and val.strip().endswith("%")
    if not explicit_pct and 0 < f < 1.0:
        f = f * 100.0
    return f


def _normalize_property_type(val: Any) -> PropertyType:
    if val is None or (isinstance(val, str) and not val.strip()):
        return DEFAULT_PROPERTY_TYPE
    if isinstance(val, PropertyType):
        return val
    t = str(val).strip().lower()
    for ptype in PropertyType:
        if ptype.value.lower() == t:
            return ptype
    raise InvalidInput(f"Unknown property_type: {val!r} (expected House or Flat)")


def validate_and_prepare_payload(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize an incoming quote payload.

    Responsibilities:
      - Ensure the three numeric core fields exist and parse.
      - Cap values at the input maxima (display ranges, not engine rules).
      - Fill property_type / deferment rate / extension term defaults.

    Negative values and zero-year leases are passed through untouched so the
    engine rejects them with InvalidInput.
    """
    for field in REQUIRED_CORE_FIELDS:
        if field not in raw:
            raise InvalidInput(f"Missing required field: {field}")

    property_value = _to_num(raw["property_value"], "property_value")
    remaining_years = _to_num(raw["remaining_years"], "remaining_years")
    annual_ground_rent = _to_num(raw["annual_ground_rent"], "annual_ground_rent")

    if remaining_years != int(remaining_years):
        raise InvalidInput(f"remaining_years must be a whole number, got {raw['remaining_years']!r}")

    rate_raw = raw.get("deferment_rate_pct")
    deferment_rate_pct = (
        config.DEFERMENT_RATE_PCT if rate_raw in (None, "") else normalize_rate_pct(rate_raw)
    )

    years_raw = raw.get("additional_years")
    additional_years = config.EXTENSION_YEARS if years_raw in (None, "") else int(
        _to_num(years_raw, "additional_years")
    )

    return {
        "property_value": min(property_value, config.MAX_PROPERTY_VALUE),
        "remaining_years": min(int(remaining_years), config.MAX_LEASE_YEARS),
        "annual_ground_rent": min(annual_ground_rent, config.MAX_GROUND_RENT),
        "property_type": _normalize_property_type(raw.get("property_type")),
        "deferment_rate_pct": deferment_rate_pct,
        "additional_years": additional_years,
    }
