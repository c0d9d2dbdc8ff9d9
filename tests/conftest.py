# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from leasehold.api.http import app  # ensures imports resolve; run tests from repo root
from leasehold.domain.premium import ValuationInput


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def make_input():
    def _make(property_value=500_000.0, remaining_years=70, annual_ground_rent=500.0, deferment_rate_pct=5.0):
        return ValuationInput(
            property_value=property_value,
            remaining_years=remaining_years,
            annual_ground_rent=annual_ground_rent,
            deferment_rate_pct=deferment_rate_pct,
        )

    return _make
