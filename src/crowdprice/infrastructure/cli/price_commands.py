"""CLI commands for the price ledger."""

from __future__ import annotations

import click

from crowdprice.application.show_price import ShowPriceHandler
from crowdprice.application.submit_price import SubmitPriceHandler
from crowdprice.domain.exceptions import DomainException
from crowdprice.infrastructure.bootstrap import (
    price_repository,
    product_repository,
    store_repository,
    validation_repository,
)
from crowdprice.infrastructure.cli.context import CliContext, pass_cli


@click.command("submit")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--store-id", default=None, help="ID of a verified store.")
@click.option("--store-name", default=None, help="Store name; created if unknown.")
@click.option("--amount", required=True, help="Observed price (e.g. 150.00).")
@pass_cli
def price_submit(
    obj: CliContext,
    product_id: str,
    store_id: str | None,
    store_name: str | None,
    amount: str,
) -> None:
    """Report a price seen at a store. It stays pending until reviewed."""
    if bool(store_id) == bool(store_name):
        raise click.ClickException("Give exactly one of --store-id or --store-name")

    handler = SubmitPriceHandler(
        price_repo=price_repository(obj.settings),
        product_repo=product_repository(obj.settings),
        store_repo=store_repository(obj.settings),
    )

    try:
        session = obj.session()
        if store_id:
            dto = handler.handle(session, product_id, store_id, amount)
        else:
            dto = handler.handle_at_named_store(session, product_id, store_name, amount)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Price {dto.id} submitted at {dto.amount}  (state={dto.state})")


@click.command("show")
@click.option("--id", "price_id", required=True, help="Price ID.")
@pass_cli
def price_show(obj: CliContext, price_id: str) -> None:
    """Show a price and its review history."""
    handler = ShowPriceHandler(
        price_repo=price_repository(obj.settings),
        validation_repo=validation_repository(obj.settings),
    )

    try:
        dto = handler.handle(price_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    p = dto.price
    click.echo(f"Price {p.id}  (state={p.state})")
    click.echo(f"Amount:    {p.amount}")
    click.echo(f"Product:   {p.product_id}")
    click.echo(f"Store:     {p.store_id}")
    click.echo(f"Submitter: {p.submitted_by}")
    click.echo(f"Reviewer:  {p.reviewed_by or '-'}")
    click.echo(f"Submitted: {p.registered_at}")
    for v in dto.validations:
        click.echo(f"  {v.decided_at}  {v.decision} by {v.reviewer_id}")
