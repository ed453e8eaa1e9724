"""CLI command modules for firetruck.

Each module holds plain command functions; ``register_commands`` attaches
them, with their short aliases, to the root Typer app.
"""

from __future__ import annotations

import typer

from . import contracts, migrate_cmd, report


def register_commands(app: typer.Typer) -> None:
    """Attach all firetruck commands to ``app``."""
    app.command("count")(contracts.count)
    app.command("list")(contracts.list_contracts)
    app.command("ls", hidden=True)(contracts.list_contracts)
    app.command("list-by-event-count")(contracts.list_by_event_count)
    app.command("lsc", hidden=True)(contracts.list_by_event_count)
    app.command("list-by-latest-timestamp")(contracts.list_by_latest_timestamp)
    app.command("lst", hidden=True)(contracts.list_by_latest_timestamp)
    app.command("contract")(contracts.contract_info)
    app.command("c", hidden=True)(contracts.contract_info)
    app.command("residual")(contracts.residual)
    app.command("r", hidden=True)(contracts.residual)
    app.command("declaration")(contracts.declaration)
    app.command("instantiate")(contracts.instantiate)
    app.command("report")(report.report)
    app.command("rp", hidden=True)(report.report)
    app.command("repl")(report.repl)
    app.command("migrate")(migrate_cmd.migrate)
    app.command("migrateKeyLocation")(migrate_cmd.migrate_key_location)


__all__ = ["register_commands"]
