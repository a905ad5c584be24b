"""Shared state handed from the root command to every subcommand."""

from __future__ import annotations

from dataclasses import dataclass

import click

from crowdprice.application.session import Session
from crowdprice.infrastructure import bootstrap
from crowdprice.infrastructure.config import Settings


@dataclass
class CliContext:
    settings: Settings
    user: str | None = None

    def session(self) -> Session:
        return bootstrap.start_session(self.settings, self.user)


pass_cli = click.make_pass_decorator(CliContext)
