import pytest

from leasehold.adapters.config import config
from leasehold.domain.errors import InvalidInput
from leasehold.domain.forecast import PropertyType
from leasehold.services.validation import normalize_rate_pct, validate_and_prepare_payload


def test_form_strings_are_normalized():
    out = validate_and_prepare_payload(
        {
            "property_value": "£500,000",
            "remaining_years": "70",
            "annual_ground_rent": "1,250",
            "property_type": "house",
            "deferment_rate_pct": "5%",
        }
    )
    assert out["property_value"] == 500_000.0
    assert out["remaining_years"] == 70
    assert out["annual_ground_rent"] == 1250.0
    assert out["property_type"] is PropertyType.HOUSE
    assert out["deferment_rate_pct"] == 5.0


def test_defaults_applied():
    out = validate_and_prepare_payload(
        {"property_value": 400000, "remaining_years": 85, "annual_ground_rent": 0}
    )
    assert out["property_type"] is PropertyType.FLAT
    assert out["deferment_rate_pct"] == config.DEFERMENT_RATE_PCT
    assert out["additional_years"] == config.EXTENSION_YEARS


def test_fractional_rate_becomes_percent():
    out = validate_and_prepare_payload(
        {"property_value": 1, "remaining_years": 1, "annual_ground_rent": 0, "deferment_rate_pct": 0.05}
    )
    assert out["deferment_rate_pct"] == pytest.approx(5.0)


def test_values_capped_at_input_maxima():
    out = validate_and_prepare_payload(
        {"property_value": 5e9, "remaining_years": 5000, "annual_ground_rent": 1e6}
    )
    assert out["property_value"] == config.MAX_PROPERTY_VALUE
    assert out["remaining_years"] == config.MAX_LEASE_YEARS
    assert out["annual_ground_rent"] == config.MAX_GROUND_RENT


def test_negative_values_pass_through_for_engine_to_reject():
    out = validate_and_prepare_payload(
        {"property_value": -5, "remaining_years": 0, "annual_ground_rent": -1}
    )
    assert out["property_value"] == -5
    assert out["remaining_years"] == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"remaining_years": 70, "annual_ground_rent": 0},
        {"property_value": "abc", "remaining_years": 70, "annual_ground_rent": 0},
        {"property_value": 1, "remaining_years": "", "annual_ground_rent": 0},
        {"property_value": 1, "remaining_years": 70.5, "annual_ground_rent": 0},
        {"property_value": 1, "remaining_years": "inf", "annual_ground_rent": 0},
        {"property_value": 1, "remaining_years": "nan", "annual_ground_rent": 0},
        {"property_value": float("inf"), "remaining_years": 70, "annual_ground_rent": 0},
        {"property_value": 1, "remaining_years": 70, "annual_ground_rent": "-inf"},
        {"property_value": 1, "remaining_years": 70, "annual_ground_rent": None},
        {"property_value": 1, "remaining_years": 70, "annual_ground_rent": 0, "property_type": "Castle"},
    ],
)
def test_bad_payloads_raise(payload):
    with pytest.raises(InvalidInput):
        validate_and_prepare_payload(payload)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("0.5%", 0.5),
        ("0.75 %", 0.75),
        ("5%", 5.0),
        (0.5, 50.0),
        ("0.05", 5.0),
    ],
)
def test_explicit_percent_sign_is_not_rescaled(raw, expected):
    assert normalize_rate_pct(raw) == pytest.approx(expected)


def test_sub_one_percent_rate_reaches_payload():
    out = validate_and_prepare_payload(
        {"property_value": 1, "remaining_years": 1, "annual_ground_rent": 0, "deferment_rate_pct": "0.5%"}
    )
    assert out["deferment_rate_pct"] == pytest.approx(0.5)
