#!/usr/bin/env python3
"""
firetruck - command-line client for a contract service.

Usage:
    ft list
    ft report "List::length events" <contract-id>
    ft migrate <source-id> <target-id>
"""

import logging
import os

import typer

from firetruck.cli.commands import register_commands
from firetruck.cli.helpers import fail
from firetruck.config import (
    DEFAULT_SERVICE_URL,
    SERVICE_ENV_VAR,
    TARGET_SERVICE_ENV_VAR,
    CliState,
)
from firetruck.errors import ConfigError

__version__ = "0.4.0"

HELP = (
    "\U0001f692 The firetruck contract service client\n\n"
    f"Uses service at {SERVICE_ENV_VAR} if set, otherwise {DEFAULT_SERVICE_URL}.\n\n"
    f"{SERVICE_ENV_VAR}={os.getenv(SERVICE_ENV_VAR) or 'not set'}\n\n"
    f"{TARGET_SERVICE_ENV_VAR}={os.getenv(TARGET_SERVICE_ENV_VAR) or 'not set'}"
)

app = typer.Typer(
    name="ft",
    help=HELP,
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and migration steps"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # CliRunner and embedders may pass a prepared CliState as obj
    if ctx.obj is None:
        try:
            ctx.obj = CliState.from_environment()
        except ConfigError as exc:
            fail(str(exc))


register_commands(app)


def main():
    app()


if __name__ == "__main__":
    main()
