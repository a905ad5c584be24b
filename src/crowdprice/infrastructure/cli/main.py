import click

from crowdprice.infrastructure.cli.context import CliContext
from crowdprice.infrastructure.cli.price_commands import price_show, price_submit
from crowdprice.infrastructure.cli.product_commands import (
    product_add,
    product_featured,
    product_lowest,
    product_scan,
    product_search,
    product_show,
)
from crowdprice.infrastructure.cli.review_commands import (
    review_approve,
    review_queue,
    review_reject,
)
from crowdprice.infrastructure.cli.store_commands import store_add, store_list, store_verify
from crowdprice.infrastructure.cli.user_commands import user_register, user_show, user_whoami
from crowdprice.infrastructure.config import get_settings
from crowdprice.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("--user", "user_id", default=None, help="Act as this user ID (overrides CROWDPRICE_USER).")
@click.pass_context
def cli(ctx: click.Context, user_id: str | None) -> None:
    """crowdprice -- crowdsourced price registry"""
    settings = get_settings()
    configure_logging(settings)
    ctx.obj = CliContext(settings=settings, user=user_id)


@cli.group()
def user() -> None:
    """Manage user profiles."""


@cli.group()
def product() -> None:
    """Browse and add products."""


@cli.group()
def store() -> None:
    """Manage stores."""


@cli.group()
def price() -> None:
    """Submit and inspect prices."""


@cli.group()
def review() -> None:
    """Review pending prices (supervisors and admins)."""


# Register subcommands
user.add_command(user_register)
user.add_command(user_show)
user.add_command(user_whoami)
product.add_command(product_add)
product.add_command(product_featured)
product.add_command(product_lowest)
product.add_command(product_scan)
product.add_command(product_search)
product.add_command(product_show)
store.add_command(store_add)
store.add_command(store_list)
store.add_command(store_verify)
price.add_command(price_show)
price.add_command(price_submit)
review.add_command(review_approve)
review.add_command(review_queue)
review.add_command(review_reject)
