"""CLI commands for the review workflow."""

from __future__ import annotations

import click

from crowdprice.application.review_price import ReviewPriceHandler
from crowdprice.application.show_pending_queue import ShowPendingQueueHandler
from crowdprice.domain.exceptions import DomainException
from crowdprice.infrastructure.bootstrap import (
    price_repository,
    product_repository,
    profile_repository,
    review_service,
    store_repository,
)
from crowdprice.infrastructure.cli.context import CliContext, pass_cli


@click.command("queue")
@pass_cli
def review_queue(obj: CliContext) -> None:
    """List pending prices, newest first."""
    handler = ShowPendingQueueHandler(
        price_repo=price_repository(obj.settings),
        product_repo=product_repository(obj.settings),
        store_repo=store_repository(obj.settings),
        profile_repo=profile_repository(obj.settings),
    )

    try:
        queue = handler.handle(obj.session())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not queue:
        click.echo("No pending prices.")
        return

    click.echo(f"{'Price ID':<34} {'Product':<20} {'Store':<18} {'Amount':>10}  Submitter")
    click.echo("-" * 100)
    for entry in queue:
        click.echo(
            f"{entry.price.id:<34} {entry.product_name or '?':<20} "
            f"{entry.store_name or '?':<18} {entry.price.amount:>10}  "
            f"{entry.submitter_name or entry.price.submitted_by}"
        )


def _review(obj: CliContext, price_id: str, action: str) -> None:
    handler = ReviewPriceHandler(review_service=review_service(obj.settings))

    try:
        dto = handler.handle(obj.session(), price_id, action)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Price {dto.id} {dto.state}.")


@click.command("approve")
@click.option("--id", "price_id", required=True, help="Price ID to approve.")
@pass_cli
def review_approve(obj: CliContext, price_id: str) -> None:
    """Approve a pending price (submitter earns 10 points)."""
    _review(obj, price_id, "approve")


@click.command("reject")
@click.option("--id", "price_id", required=True, help="Price ID to reject.")
@pass_cli
def review_reject(obj: CliContext, price_id: str) -> None:
    """Reject a pending price."""
    _review(obj, price_id, "reject")
