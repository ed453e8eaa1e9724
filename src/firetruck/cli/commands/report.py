"""Report evaluation commands: one-shot ``report`` and the interactive ``repl``."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console

from firetruck.api import ContractServiceClient
from firetruck.cli.helpers import cli_state, run_or_exit
from firetruck.config import ServiceConfig
from firetruck.errors import FiretruckError

logger = logging.getLogger(__name__)

console = Console()

REPL_PROMPT = "ft> "
REPL_QUIT = {":q", ":quit"}


async def _evaluate(config: ServiceConfig, expression: str, contract_id: Optional[str]) -> str:
    async with ContractServiceClient(config) as service:
        return await service.report_rendered(expression, contract_id)


def report(
    ctx: typer.Context,
    expression: str = typer.Argument(..., metavar="CSL", help="Report expression to evaluate"),
    contract_id: Optional[str] = typer.Argument(None, metavar="[ID]", help="Contract to evaluate on"),
) -> None:
    """Evaluate report on contract with [ID] (or no contract)."""
    typer.echo(run_or_exit(_evaluate(cli_state(ctx).source, expression, contract_id)))


def repl(
    ctx: typer.Context,
    contract_id: Optional[str] = typer.Argument(None, metavar="[ID]", help="Contract to evaluate on"),
) -> None:
    """Report REPL (optionally) on a contract instance by [ID].

    Each line is evaluated as a report expression. Errors are printed and
    the loop continues; end of input or ``:q`` exits.
    """
    config = cli_state(ctx).source
    while True:
        try:
            line = console.input(REPL_PROMPT)
        except (EOFError, KeyboardInterrupt):
            typer.echo()
            break
        expression = line.strip()
        if not expression:
            continue
        if expression in REPL_QUIT:
            break
        try:
            typer.echo(asyncio.run(_evaluate(config, expression, contract_id)))
        except FiretruckError as exc:
            logger.debug("REPL evaluation failed", exc_info=True)
            typer.secho(str(exc), fg=typer.colors.RED, err=True)
