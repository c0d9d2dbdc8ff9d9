# src/leasehold/api/http.py
from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query

from leasehold.adapters.config import config
from leasehold.adapters.logging_utils import get_logger, log_context
from leasehold.domain.assumptions import ValuationAssumptions
from leasehold.domain.relativity import lookup_relativity
from leasehold.services.validation import validate_and_prepare_payload
from leasehold.services.valuation import run_valuation
from .schemas import QuoteRequest, QuoteResponse, RelativityOut

logger = get_logger(__name__)

app = FastAPI(title="leasehold")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": config.ENV}


@app.post("/quote", response_model=QuoteResponse)
def quote_endpoint(payload: QuoteRequest) -> QuoteResponse:
    """
    Premium breakdown, forecast value and wait projection for one lease.
    """
    try:
        prepared = validate_and_prepare_payload(payload.model_dump())
        assumptions = ValuationAssumptions(
            deferment_rate_pct=prepared["deferment_rate_pct"],
            additional_years=prepared["additional_years"],
            wait_horizon_years=config.WAIT_HORIZON_YEARS,
        )
        result = run_valuation(
            property_value=prepared["property_value"],
            remaining_years=prepared["remaining_years"],
            annual_ground_rent=prepared["annual_ground_rent"],
            property_type=prepared["property_type"],
            assumptions=assumptions,
        )
    except ValueError as e:
        # InvalidInput from the engine, or assumption bounds from pydantic
        logger.info("quote rejected", extra=log_context(reason=str(e)))
        raise HTTPException(status_code=400, detail=str(e)) from e

    return QuoteResponse(**result.to_dict())


@app.get("/relativity", response_model=RelativityOut)
def relativity_endpoint(years: int = Query(..., ge=1)) -> RelativityOut:
    return RelativityOut(years=years, relativity=lookup_relativity(years))
