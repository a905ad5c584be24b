"""CLI commands for stores."""

from __future__ import annotations

import click

from crowdprice.application.add_store import AddStoreHandler
from crowdprice.application.list_stores import ListVerifiedStoresHandler
from crowdprice.application.verify_store import VerifyStoreHandler
from crowdprice.domain.exceptions import DomainException
from crowdprice.infrastructure.bootstrap import profile_repository, store_repository
from crowdprice.infrastructure.cli.context import CliContext, pass_cli


@click.command("list")
@pass_cli
def store_list(obj: CliContext) -> None:
    """List verified stores (valid submission targets)."""
    handler = ListVerifiedStoresHandler(store_repo=store_repository(obj.settings))

    try:
        stores = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not stores:
        click.echo("No verified stores found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} Address")
    click.echo("-" * 80)
    for s in stores:
        click.echo(f"{s.id:<34} {s.name:<24} {s.address}")


@click.command("add")
@click.option("--name", required=True, help="Store name (matched exactly).")
@click.option("--address", default="", help="Street address.")
@pass_cli
def store_add(obj: CliContext, name: str, address: str) -> None:
    """Add a store, or return the existing one with the same name."""
    handler = AddStoreHandler(store_repo=store_repository(obj.settings))

    try:
        dto = handler.handle(obj.session(), name=name, address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    status = "verified" if dto.verified else "unverified"
    click.echo(f"Store {dto.id} '{dto.name}' ({status})")


@click.command("verify")
@click.option("--id", "store_id", required=True, help="Store ID to verify.")
@pass_cli
def store_verify(obj: CliContext, store_id: str) -> None:
    """Mark a store as verified (supervisors and admins)."""
    handler = VerifyStoreHandler(
        store_repo=store_repository(obj.settings),
        profile_repo=profile_repository(obj.settings),
    )

    try:
        dto = handler.handle(obj.session(), store_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Store {dto.id} '{dto.name}' verified.")
