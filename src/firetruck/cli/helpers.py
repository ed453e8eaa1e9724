"""Shared plumbing for CLI commands."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, TypeVar

import typer

from firetruck.config import CliState
from firetruck.errors import FiretruckError

T = TypeVar("T")


def cli_state(ctx: typer.Context) -> CliState:
    """Service configuration prepared by the root callback."""
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        raise RuntimeError("CLI state missing: commands must run under the firetruck app")
    return state


def fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def run_or_exit(awaitable: Awaitable[T]) -> T:
    """Run ``awaitable`` to completion, turning firetruck errors into exit code 1."""
    try:
        return asyncio.run(awaitable)  # type: ignore[arg-type]
    except FiretruckError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


def print_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, sort_keys=True, default=str))
