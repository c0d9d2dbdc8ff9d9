from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from loguru import logger

from leasehold.adapters.config import config
from leasehold.analysis.batch import quote_frame
from leasehold.domain.assumptions import ValuationAssumptions
from leasehold.domain.money import format_money
from leasehold.services.validation import normalize_rate_pct, validate_and_prepare_payload
from leasehold.services.valuation import run_valuation

app = typer.Typer(help="Lease extension premium and value forecast.")


def _assumptions(deferment_rate: Optional[float], additional_years: Optional[int]) -> ValuationAssumptions:
    base = config.assumptions()
    return ValuationAssumptions(
        deferment_rate_pct=deferment_rate if deferment_rate is not None else base.deferment_rate_pct,
        additional_years=additional_years if additional_years is not None else base.additional_years,
        wait_horizon_years=base.wait_horizon_years,
    )


@app.command()
def quote(
    value: str = typer.Option(..., "--value", help="Current property value, e.g. 500,000"),
    years: str = typer.Option(..., "--years", help="Remaining lease years"),
    ground_rent: str = typer.Option("0", "--ground-rent", help="Annual ground rent"),
    property_type: str = typer.Option("Flat", "--type", help="House or Flat"),
    deferment_rate: Optional[float] = typer.Option(
        None, "--deferment-rate", help="Deferment rate in percent (default from config)"
    ),
    additional_years: Optional[int] = typer.Option(
        None, "--additional-years", help="Years added by the extension (default from config)"
    ),
) -> None:
    """
    Quote the premium and forecast value for a single lease.
    """
    try:
        prepared = validate_and_prepare_payload(
            {
                "property_value": value,
                "remaining_years": years,
                "annual_ground_rent": ground_rent,
                "property_type": property_type,
                "deferment_rate_pct": deferment_rate,
                "additional_years": additional_years,
            }
        )
        assumptions = _assumptions(prepared["deferment_rate_pct"], prepared["additional_years"])
        result = run_valuation(
            prepared["property_value"],
            prepared["remaining_years"],
            prepared["annual_ground_rent"],
            prepared["property_type"],
            assumptions,
        )
    except ValueError as exc:
        logger.error("Quote failed", error=str(exc))
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    logger.info(
        "Quote computed",
        remaining_years=prepared["remaining_years"],
        total_premium=result.premium.total,
    )

    p = result.premium.rounded()
    f = result.forecast
    lines = [
        ("Relativity", f"{result.relativity * 100:.1f}%"),
        ("Current lease value", format_money(result.current_lease_value)),
        ("Marriage value", format_money(p["marriage_value"])),
        ("Property value (reversion)", format_money(p["pvc"])),
        ("Ground rent", format_money(p["grc"])),
        ("Total premium", format_money(p["total"])),
        ("Forecast value", format_money(f.forecast_value)),
        ("Value increase", f"{format_money(f.value_increase)} ({f.percent_increase:.1f}%)"),
        ("New lease length", f"{f.new_lease_years} years"),
    ]
    for label, text in lines:
        typer.echo(f"{label:<28}{text}")

    typer.echo("")
    typer.echo("If you wait:")
    for point in result.wait:
        typer.echo(f"  {point.remaining_years:>4} years left  {format_money(point.total_premium)}")


@app.command()
def batch(
    input_csv: Path = typer.Option(..., "--input", help="CSV with property_value, remaining_years, annual_ground_rent"),
    output_csv: Path = typer.Option(..., "--output", help="Where to write the quoted CSV"),
    deferment_rate: Optional[float] = typer.Option(None, "--deferment-rate", help="Deferment rate in percent (0.05 is read as 5%)"),
) -> None:
    """
    Quote every row of a CSV file.
    """
    try:
        df = pd.read_csv(input_csv)
    except (OSError, ValueError) as exc:
        logger.error("Could not read leases", path=str(input_csv), error=str(exc))
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    logger.info("Loaded leases", path=str(input_csv), rows=len(df))

    try:
        rate = normalize_rate_pct(deferment_rate) if deferment_rate is not None else None
        quoted = quote_frame(df, _assumptions(rate, None))
    except ValueError as exc:
        logger.error("Batch quote failed", error=str(exc))
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    output_csv.parent.mkdir(parents=True, exist_ok=True)
    quoted.to_csv(output_csv, index=False)
    logger.info("Wrote quotes", path=str(output_csv), rows=len(quoted))


if __name__ == "__main__":
    app()
