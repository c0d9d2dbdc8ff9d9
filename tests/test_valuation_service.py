import pytest

from leasehold.domain.assumptions import ValuationAssumptions
from leasehold.domain.errors import InvalidInput
from leasehold.domain.forecast import PropertyType
from leasehold.domain.relativity import RelativityTable, lookup_relativity
from leasehold.services.valuation import project_wait, run_valuation


def test_run_valuation_composes_engine():
    res = run_valuation(500_000, 70, 500, "Flat")

    assert res.relativity == pytest.approx(lookup_relativity(70))
    assert res.premium.marriage_value > 0
    assert res.current_lease_value == round(500_000 * res.relativity)
    assert res.equity_gain == res.forecast.forecast_value - 500_000
    assert res.property_type is PropertyType.FLAT
    assert res.inputs.deferment_rate_pct == 5.0


def test_assumptions_flow_into_engine():
    low = run_valuation(500_000, 70, 500, "Flat", ValuationAssumptions(deferment_rate_pct=4.0))
    high = run_valuation(500_000, 70, 500, "Flat", ValuationAssumptions(deferment_rate_pct=6.0))

    # lower deferment rate -> larger present value of the reversion
    assert low.premium.pvc > high.premium.pvc

    res = run_valuation(500_000, 70, 500, "Flat", ValuationAssumptions(additional_years=125))
    assert res.forecast.new_lease_years == 195


def test_wait_projection_shortens_lease_each_year():
    res = run_valuation(500_000, 81, 500, "Flat", ValuationAssumptions(wait_horizon_years=4))

    assert [w.remaining_years for w in res.wait] == [81, 80, 79, 78]
    totals = [w.total_premium for w in res.wait]
    assert totals == sorted(totals)
    assert res.wait[0].total_premium == pytest.approx(res.premium.total)
    # crossing below 80 years brings in marriage value
    assert totals[2] - totals[1] > totals[1] - totals[0]


def test_wait_projection_never_below_one_year():
    res = run_valuation(500_000, 2, 0, "Flat", ValuationAssumptions(wait_horizon_years=3))
    assert [w.remaining_years for w in res.wait] == [2, 1, 1]


def test_project_wait_uses_given_table(make_input):
    flat_table = RelativityTable([(1, 1.0), (2, 1.0)])
    points = project_wait(make_input(remaining_years=50), 2, flat_table)
    # relativity 1.0 leaves no marriage value
    for p in points:
        assert p.total_premium < 500_000 * 0.2


def test_to_dict_rounds_for_display():
    d = run_valuation(500_000, 70, 500, PropertyType.HOUSE).to_dict()

    assert d["property_type"] == "House"
    assert set(d["premium"]) == {"total", "marriage_value", "grc", "pvc"}
    assert all(isinstance(v, int) for v in d["premium"].values())
    assert all(isinstance(w["total_premium"], int) for w in d["wait"])
    assert d["forecast"]["new_lease_years"] == 160


def test_run_valuation_is_idempotent():
    assert run_valuation(350_000, 66, 250, "House") == run_valuation(350_000, 66, 250, "House")


def test_invalid_years_rejected_before_lookup():
    with pytest.raises(InvalidInput):
        run_valuation(500_000, 0, 500, "Flat")


def test_result_is_hashable_value():
    a = run_valuation(500_000, 70, 500, "Flat")
    b = run_valuation(500_000, 70, 500, "Flat")
    assert isinstance(a.wait, tuple)
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
