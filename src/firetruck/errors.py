"""Exception hierarchy for firetruck.

Errors raised by the remote access layer propagate untouched through the
migration engine. Only the command layer catches them and converts them
into an exit code.
"""

from __future__ import annotations

import json
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .migration.state import ReplayProgress
    from .values.models import Value


class FiretruckError(Exception):
    """Base exception for firetruck errors."""
    pass


class ConfigError(FiretruckError):
    """Configuration file or environment variable could not be used."""


class TransportError(FiretruckError):
    """Network failure or a response that could not be understood."""


class RetrievalError(FiretruckError):
    """Data could not be read from the contract service."""


class NotFoundError(RetrievalError):
    """A contract or declaration id is unknown to the service."""

    def __init__(self, kind: str, identifier: str | None):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Could not find {kind} with id: {identifier}")


class EvaluationError(RetrievalError):
    """The service failed to evaluate a report expression."""

    def __init__(self, expression: str, diagnostic: str, status_code: int | None = None):
        self.expression = expression
        self.diagnostic = diagnostic
        self.status_code = status_code
        super().__init__(f"Evaluation of '{expression}' failed: {diagnostic}")


class PreconditionError(FiretruckError):
    """Migration target already has events applied."""

    def __init__(self, contract_id: str, event_count: int):
        self.contract_id = contract_id
        self.event_count = event_count
        super().__init__(
            f"Contract with id {contract_id} is not in an initial state "
            f"({event_count} event(s) already applied)"
        )


class ApplyError(FiretruckError):
    """An event was rejected while replaying a contract state.

    The target contract keeps every event applied before the failure.
    ``progress`` records how far the replay got.
    """

    def __init__(
        self,
        contract_id: str,
        event: "Value",
        response: Any,
        progress: "ReplayProgress",
    ):
        from .values.codec import encode_value

        self.contract_id = contract_id
        self.event = event
        self.response = response
        self.progress = progress
        super().__init__(
            f"Error when applying event {progress.applied + 1}/{progress.total} "
            f"to contract {contract_id}:\n"
            f"{json.dumps(encode_value(event), indent=2)}\n"
            f"Response was:\n{response}"
        )
