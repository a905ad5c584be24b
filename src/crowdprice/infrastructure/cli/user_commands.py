"""CLI commands for user profiles."""

from __future__ import annotations

import click

from crowdprice.application.dto import ProfileDTO, profile_to_dto
from crowdprice.application.register_user import RegisterUserHandler
from crowdprice.application.show_profile import ShowProfileHandler
from crowdprice.domain.exceptions import DomainException
from crowdprice.infrastructure.bootstrap import profile_repository
from crowdprice.infrastructure.cli.context import CliContext, pass_cli


def _display_profile(dto: ProfileDTO) -> None:
    click.echo(f"User {dto.id}  ({dto.role})")
    click.echo(f"Name:       {dto.name}")
    click.echo(f"Email:      {dto.email}")
    click.echo(f"Points:     {dto.points}")
    click.echo(f"Registered: {dto.registered_at}")


@click.command("register")
@click.option("--id", "user_id", required=True, help="User ID issued by the identity provider.")
@click.option("--name", required=True, help="Display name.")
@click.option("--email", required=True, help="Email address.")
@pass_cli
def user_register(obj: CliContext, user_id: str, name: str, email: str) -> None:
    """Create the profile of a newly signed-up user."""
    handler = RegisterUserHandler(profile_repo=profile_repository(obj.settings))

    try:
        dto = handler.handle(user_id=user_id, name=name, email=email)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {dto.id} registered as {dto.role}")


@click.command("show")
@click.option("--id", "user_id", required=True, help="User ID.")
@pass_cli
def user_show(obj: CliContext, user_id: str) -> None:
    """Show a user's profile and points."""
    handler = ShowProfileHandler(profile_repo=profile_repository(obj.settings))

    try:
        dto = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_profile(dto)


@click.command("whoami")
@pass_cli
def user_whoami(obj: CliContext) -> None:
    """Show the signed-in user."""
    try:
        session = obj.session()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if session.profile is None:
        click.echo("Not signed in.")
        return

    _display_profile(profile_to_dto(session.profile))
