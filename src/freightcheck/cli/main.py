"""Command-line interface for freightcheck."""

from __future__ import annotations

import json

import click

from freightcheck.compliance.evaluator import get_evaluator
from freightcheck.compliance.models import ComplianceCheckInput
from freightcheck.compliance.regulations import get_regulation_registry
from freightcheck.observability import run_scope


@click.group()
def cli() -> None:
    """freightcheck command suite."""


@cli.command("check")
@click.option("--origin", "origin_address", required=True, help="Origin address text.")
@click.option("--destination", "destination_address", required=True, help="Destination address text.")
@click.option("--description", "item_description", default="", help="Goods description.")
@click.option("--hs-code", default=None, help="Harmonized System code, if known.")
@click.option("--weight", default=0.0, show_default=True, type=float, help="Weight in kg.")
@click.option("--value", default=0.0, show_default=True, type=float, help="Declared value.")
@click.option(
    "--service-type",
    type=click.Choice(["pickup", "dropoff"]),
    default=None,
    help="Collection mode.",
)
def check(
    origin_address: str,
    destination_address: str,
    item_description: str,
    hs_code: str | None,
    weight: float,
    value: float,
    service_type: str | None,
) -> None:
    """Evaluate a shipment and print the result as JSON.

    Exits with status 1 when the shipment carries blocking errors.
    """

    request = ComplianceCheckInput(
        origin_address=origin_address,
        destination_address=destination_address,
        item_description=item_description,
        hs_code=hs_code,
        weight=weight,
        value=value,
        service_type=service_type,
    )
    with run_scope():
        result = get_evaluator().evaluate(request)
    click.echo(json.dumps(result.model_dump(mode="json"), indent=2, sort_keys=True))
    if result.is_blocked:
        raise SystemExit(1)


@cli.command("countries")
def countries() -> None:
    """List supported country codes."""

    for regulation in get_regulation_registry():
        flag = " (pre-inspection)" if regulation.requires_pre_inspection else ""
        click.echo(f"{regulation.code}\t{regulation.name}{flag}")


if __name__ == "__main__":  # pragma: no cover
    cli()
