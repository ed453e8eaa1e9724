"""Transplant the event history of one contract onto a fresh contract.

A migration reads the source contract's events with a report expression,
optionally rewrites each event, then applies them one at a time to the
target. The target must have no events when the replay starts. Nothing is
rolled back when an event is rejected: the target keeps the events applied
so far and must not be reused.

The initial-state check and the first applied event are separate requests,
so a client applying events to the target in between is not detected.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..api import ContractServiceClient
from ..errors import ApplyError, PreconditionError, TransportError
from ..values import ListValue, RecordValue
from .state import ContractState, ReplayProgress
from .transforms import EventTransformation, identity

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_EXPRESSION = "events"

ProgressCallback = Callable[[ReplayProgress], None]


class MigrationEngine:
    """Moves contract state from a source service to a target service.

    Source and target may be clients for the same service.
    """

    def __init__(self, source: ContractServiceClient, target: ContractServiceClient):
        self.source = source
        self.target = target

    async def get_state(
        self,
        contract_id: str,
        events_expression: str = DEFAULT_EVENTS_EXPRESSION,
    ) -> ContractState:
        """Read the ordered events of ``contract_id`` from the source service.

        Raises:
            NotFoundError: The contract does not exist.
            EvaluationError: The expression could not be evaluated.
            TransportError: The expression did not yield a list.
        """
        value = await self.source.report(events_expression, contract_id)
        if not isinstance(value, ListValue):
            raise TransportError(
                f"Expected '{events_expression}' to yield a list of events for contract "
                f"{contract_id}, got {type(value).__name__}"
            )
        logger.info("Extracted %d event(s) from contract %s", len(value.elements), contract_id)
        return ContractState(value.elements)

    async def load_state(
        self,
        contract_id: str,
        state: ContractState,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ReplayProgress:
        """Apply every event of ``state`` to ``contract_id`` on the target service.

        Events are sent strictly in order; each request completes before
        the next is issued.

        Raises:
            PreconditionError: The target already has events. Nothing is applied.
            ApplyError: An event was rejected or its request failed. Earlier
                events stay applied and later ones are not attempted.
        """
        existing = await self.target.number_of_events(contract_id)
        if existing > 0:
            raise PreconditionError(contract_id, existing)

        progress = ReplayProgress(total=len(state))
        _notify(on_progress, progress)
        progress = progress.started()
        _notify(on_progress, progress)

        for event in state.events:
            cause: Optional[TransportError] = None
            if isinstance(event, RecordValue):
                try:
                    outcome = await self.target.apply_event(contract_id, event)
                except TransportError as exc:
                    accepted, response, cause = False, str(exc), exc
                else:
                    accepted, response = outcome.ok, outcome.describe()
            else:
                accepted, response = False, f"Event is not a record value: {type(event).__name__}"
            if not accepted:
                progress = progress.failed()
                logger.error(
                    "Event %d/%d was rejected by contract %s",
                    progress.applied + 1,
                    progress.total,
                    contract_id,
                )
                _notify(on_progress, progress)
                raise ApplyError(contract_id, event, response, progress) from cause
            progress = progress.advanced()
            logger.info("Applied event %d/%d to contract %s", progress.applied, progress.total, contract_id)
            _notify(on_progress, progress)

        progress = progress.finished()
        _notify(on_progress, progress)
        return progress

    async def migrate(
        self,
        source_id: str,
        target_id: str,
        events_expression: str = DEFAULT_EVENTS_EXPRESSION,
        transformation: EventTransformation = identity,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ReplayProgress:
        state = (await self.get_state(source_id, events_expression)).transformed(transformation)
        logger.info("Migrating %d event(s) from %s to %s", len(state), source_id, target_id)
        return await self.load_state(target_id, state, on_progress)


def _notify(callback: Optional[ProgressCallback], progress: ReplayProgress) -> None:
    if callback is not None:
        callback(progress)
