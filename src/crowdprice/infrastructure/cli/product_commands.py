"""CLI commands for products and their prices."""

from __future__ import annotations

import click

from crowdprice.application.create_product import CreateProductHandler
from crowdprice.application.dto import ProductQuoteDTO
from crowdprice.application.scan_barcode import ScanBarcodeHandler
from crowdprice.application.search_products import SearchProductsHandler
from crowdprice.application.show_featured import ShowFeaturedHandler
from crowdprice.application.show_lowest_price import ShowLowestPriceHandler
from crowdprice.application.show_product import ShowProductHandler
from crowdprice.domain.exceptions import DomainException
from crowdprice.infrastructure.bootstrap import (
    aggregation_service,
    product_repository,
    rewards_ledger,
)
from crowdprice.infrastructure.cli.context import CliContext, pass_cli


def _display_quotes(quotes: list[ProductQuoteDTO]) -> None:
    """Shared formatting for product lists with their lowest price."""
    click.echo(f"{'ID':<34} {'Product':<24} {'Brand':<14} {'Lowest':>10}  Store")
    click.echo("-" * 96)
    for q in quotes:
        lowest = q.lowest.amount if q.lowest else "-"
        store = q.lowest.store_name if q.lowest else ""
        click.echo(
            f"{q.product.id:<34} {q.product.name:<24} {q.product.brand:<14} {lowest:>10}  {store}"
        )


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--brand", required=True, help="Brand.")
@click.option("--category", default="", help="Category (free text).")
@click.option("--barcode", default=None, help="Barcode, if the product has one.")
@pass_cli
def product_add(
    obj: CliContext, name: str, brand: str, category: str, barcode: str | None
) -> None:
    """Add a new product to the catalog (+20 points)."""
    handler = CreateProductHandler(
        product_repo=product_repository(obj.settings),
        rewards=rewards_ledger(obj.settings),
    )

    try:
        dto = handler.handle(
            obj.session(), name=name, brand=brand, category=category, barcode=barcode
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added")


@click.command("scan")
@click.option("--barcode", required=True, help="Scanned barcode.")
@pass_cli
def product_scan(obj: CliContext, barcode: str) -> None:
    """Look up a product by barcode."""
    handler = ScanBarcodeHandler(product_repo=product_repository(obj.settings))

    try:
        dto = handler.handle(barcode)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto is None:
        click.echo(f"No product with barcode {barcode}. Add it with 'product add'.")
        return
    click.echo(f"{dto.id}  {dto.name} ({dto.brand})")


@click.command("search")
@click.argument("term")
@click.option("--limit", type=int, default=None, help="Maximum number of results.")
@pass_cli
def product_search(obj: CliContext, term: str, limit: int | None) -> None:
    """Search products by name, brand or barcode."""
    handler = SearchProductsHandler(aggregation=aggregation_service(obj.settings))
    if limit is None:
        limit = obj.settings.search_limit

    try:
        quotes = handler.handle(term, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not quotes:
        click.echo("No products found.")
        return
    _display_quotes(quotes)


@click.command("featured")
@click.option("--window", type=int, default=None, help="Recent verified prices to scan.")
@pass_cli
def product_featured(obj: CliContext, window: int | None) -> None:
    """Show products with recently verified prices."""
    handler = ShowFeaturedHandler(aggregation=aggregation_service(obj.settings))
    if window is None:
        window = obj.settings.featured_window

    try:
        quotes = handler.handle(window)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not quotes:
        click.echo("No verified prices yet.")
        return
    _display_quotes(quotes)


@click.command("lowest")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_cli
def product_lowest(obj: CliContext, product_id: str) -> None:
    """Show the lowest verified price of a product."""
    handler = ShowLowestPriceHandler(
        product_repo=product_repository(obj.settings),
        aggregation=aggregation_service(obj.settings),
    )

    try:
        quote = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if quote is None:
        click.echo("No verified prices for this product.")
        return
    click.echo(f"{quote.amount} at {quote.store_name}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_cli
def product_show(obj: CliContext, product_id: str) -> None:
    """Show a product and all of its verified prices."""
    handler = ShowProductHandler(
        product_repo=product_repository(obj.settings),
        aggregation=aggregation_service(obj.settings),
    )

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.product.name}  ({dto.product.brand})")
    click.echo(f"Barcode:  {dto.product.barcode or '-'}")
    click.echo(f"Category: {dto.product.category or '-'}")
    click.echo()

    if not dto.prices:
        click.echo("No verified prices yet.")
        return
    click.echo(f"  {'Store':<24} {'Price':>10}  {'Registered':<20}")
    click.echo(f"  {'-'*56}")
    for q in dto.prices:
        click.echo(f"  {q.store_name:<24} {q.amount:>10}  {q.registered_at:<20}")
