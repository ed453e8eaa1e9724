"""CLI commands for migrating contract state between contracts.

Usage:
    ft migrate SOURCE TARGET                       # copy all events
    ft migrate SOURCE TARGET --csl "EXPR"          # events selected by EXPR
    ft migrateKeyLocation SOURCE TARGET            # fill AcceptCarShare.keyLocation

Events are read from the service at FT_SERVICE and applied to TARGET on
the service at FT_SERVICE_TARGET (or FT_SERVICE when unset). TARGET must be
a freshly instantiated contract with no events. If an event is rejected the
events before it stay applied; use a new target contract to retry.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from firetruck.api import ContractServiceClient
from firetruck.cli.helpers import cli_state, run_or_exit
from firetruck.migration import (
    DEFAULT_EVENTS_EXPRESSION,
    EventTransformation,
    MigrationEngine,
    ReplayProgress,
    add_empty_key_location,
    identity,
)

console = Console(stderr=True)


def _run_migration(
    ctx: typer.Context,
    source_id: str,
    target_id: str,
    events_expression: str,
    transformation: EventTransformation,
) -> ReplayProgress:
    state = cli_state(ctx)

    async def _run() -> ReplayProgress:
        async with ContractServiceClient(state.source) as source, ContractServiceClient(state.target) as target:
            engine = MigrationEngine(source, target)
            with Progress(
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                console=console,
                transient=True,
            ) as progress_display:
                task = progress_display.add_task(f"Replaying onto {target_id}", total=None)

                def _on_progress(progress: ReplayProgress) -> None:
                    progress_display.update(task, total=progress.total, completed=progress.applied)

                return await engine.migrate(
                    source_id,
                    target_id,
                    events_expression,
                    transformation,
                    on_progress=_on_progress,
                )

    return run_or_exit(_run())


def migrate(
    ctx: typer.Context,
    source_id: str = typer.Argument(..., metavar="ID1", help="Source contract id"),
    target_id: str = typer.Argument(..., metavar="ID2", help="Target contract id (must have no events)"),
    csl: str = typer.Option(
        DEFAULT_EVENTS_EXPRESSION,
        "--csl",
        help="The CSL used to retrieve the events from the source",
    ),
) -> None:
    """Migrate events from contract with ID1 to contract with ID2.

    Uses FT_SERVICE_TARGET if set, otherwise the same URL as the source contract.
    """
    result = _run_migration(ctx, source_id, target_id, csl, identity)
    typer.echo(f"Migrated {result.applied} event(s) from {source_id} to {target_id}")


def migrate_key_location(
    ctx: typer.Context,
    source_id: str = typer.Argument(..., metavar="ID1", help="Source contract id"),
    target_id: str = typer.Argument(..., metavar="ID2", help="Target contract id (must have no events)"),
) -> None:
    """Migrate events from ID1 to ID2, setting keyLocation on AcceptCarShare events if not already set.

    Uses FT_SERVICE_TARGET if set, otherwise the same URL as the source contract.
    """
    result = _run_migration(ctx, source_id, target_id, DEFAULT_EVENTS_EXPRESSION, add_empty_key_location)
    typer.echo(f"Migrated {result.applied} event(s) from {source_id} to {target_id}")
