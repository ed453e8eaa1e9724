"""Commands for listing and inspecting contracts and declarations."""

from __future__ import annotations

import json
from typing import List

import typer

from firetruck.api import EVENT_COUNT_EXPRESSION, ContractReport, ContractServiceClient
from firetruck.cli.helpers import cli_state, print_json, run_or_exit
from firetruck.values import (
    ValueComparer,
    ValueDecodeError,
    decode_value,
    instant_value_comparer,
    int_value_comparer,
    qual,
    render_value,
)

LATEST_TIMESTAMP_EXPRESSION = (
    "let val lastEvent = (\\Some x -> x) (List::last (const True) events) in lastEvent.timestamp"
)


async def _sorted_reports(ctx: typer.Context, expression: str, comparer: ValueComparer) -> list[ContractReport]:
    async with ContractServiceClient(cli_state(ctx).source) as service:
        contract_ids = await service.contract_ids()
        return await service.sort_by_report(
            [(contract_id, ()) for contract_id in contract_ids],
            expression,
            comparer,
        )


def _print_reports(reports: list[ContractReport], label: str, missing: str) -> None:
    for report in reports:
        rendered = missing if report.value is None else render_value(report.value)
        typer.echo(f"{report.contract_id}\t{label}: {rendered}")


def count(ctx: typer.Context) -> None:
    """Count instantiated contracts."""

    async def _run() -> int:
        async with ContractServiceClient(cli_state(ctx).source) as service:
            return len(await service.list_contracts())

    typer.echo(run_or_exit(_run()))


def list_contracts(ctx: typer.Context) -> None:
    """List instantiated contract ids."""

    async def _run() -> list[str]:
        async with ContractServiceClient(cli_state(ctx).source) as service:
            return await service.contract_ids()

    for contract_id in run_or_exit(_run()):
        typer.echo(contract_id)


def list_by_event_count(ctx: typer.Context) -> None:
    """List instantiated contracts sorted by event count."""
    reports = run_or_exit(_sorted_reports(ctx, EVENT_COUNT_EXPRESSION, int_value_comparer))
    _print_reports(reports, "event count", "null")


def list_by_latest_timestamp(ctx: typer.Context) -> None:
    """List instantiated contracts sorted by most recently applied event."""
    reports = run_or_exit(_sorted_reports(ctx, LATEST_TIMESTAMP_EXPRESSION, instant_value_comparer))
    _print_reports(reports, "last timestamp", "N/A")


def contract_info(
    ctx: typer.Context,
    contract_id: str = typer.Argument(..., metavar="ID", help="Contract id"),
) -> None:
    """Information about the contract with ID."""

    async def _run():
        async with ContractServiceClient(cli_state(ctx).source) as service:
            contract = await service.get_contract(contract_id)
            return contract, await service.number_of_events(contract_id)

    contract, event_count = run_or_exit(_run())
    print_json(contract.model_dump(by_alias=True))
    typer.echo()
    typer.echo("Number of applied events:")
    typer.echo(event_count)


def residual(
    ctx: typer.Context,
    contract_id: str = typer.Argument(..., metavar="ID", help="Contract id"),
    simplify: bool = typer.Option(False, "--simplify", "-s", help="Simplify residual contract"),
) -> None:
    """Print the residual contract with ID."""

    async def _run():
        async with ContractServiceClient(cli_state(ctx).source) as service:
            return await service.residual(contract_id, simplify)

    typer.echo(run_or_exit(_run()).csl)


def declaration(
    ctx: typer.Context,
    declaration_id: str = typer.Argument(..., metavar="ID", help="Declaration id"),
) -> None:
    """Print the source of the declaration with ID."""

    async def _run():
        async with ContractServiceClient(cli_state(ctx).source) as service:
            return await service.get_declaration(declaration_id)

    typer.echo(run_or_exit(_run()).csl)


def instantiate(
    ctx: typer.Context,
    declaration_id: str = typer.Argument(..., metavar="DECLARATION_ID", help="Declaration to instantiate"),
    name: str = typer.Argument(..., help="Name of the new contract"),
    entry_point: str = typer.Option(..., "--entry-point", "-e", help="Qualified template name, e.g. Ns::Template"),
    peers: List[str] = typer.Option([], "--peer", help="Peer id taking part in the contract (repeatable)"),
    args: List[str] = typer.Option([], "--arg", help="Declaration argument as a JSON-encoded value (repeatable)"),
) -> None:
    """Instantiate a contract from a declaration and print its id."""
    try:
        entry = qual(entry_point)
        values = [decode_value(json.loads(arg)) for arg in args]
    except (ValueError, ValueDecodeError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    async def _run():
        async with ContractServiceClient(cli_state(ctx).source) as service:
            return await service.instantiate(declaration_id, name, values, entry, peers)

    typer.echo(run_or_exit(_run()).contract_id)
