"""Contract state snapshots and replay progress."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Tuple

from ..values import Value


@dataclass(frozen=True)
class ContractState:
    """The ordered events applied to a contract, oldest first."""
    events: Tuple[Value, ...] = ()

    def __len__(self) -> int:
        return len(self.events)

    def transformed(self, transformation: Callable[[Value], Value]) -> "ContractState":
        """Apply ``transformation`` to every event, keeping their order."""
        return ContractState(tuple(transformation(event) for event in self.events))


class ReplayPhase(Enum):
    """Where a target contract is in a replay."""
    INITIAL = "initial"        # no events applied, precondition verified
    REPLAYING = "replaying"
    MIGRATED = "migrated"      # every event applied
    FAILED = "failed"          # stopped after ``applied`` events, no rollback


@dataclass(frozen=True)
class ReplayProgress:
    """Snapshot of a replay onto one target contract.

    ``applied`` counts events the service accepted. A FAILED replay leaves
    exactly that many events on the target, which is therefore no longer a
    valid migration target.
    """

    total: int
    applied: int = 0
    phase: ReplayPhase = ReplayPhase.INITIAL

    @property
    def last_applied_index(self) -> int:
        """Index of the last accepted event, -1 if none was accepted."""
        return self.applied - 1

    def started(self) -> "ReplayProgress":
        return replace(self, phase=ReplayPhase.REPLAYING)

    def advanced(self) -> "ReplayProgress":
        return replace(self, applied=self.applied + 1)

    def finished(self) -> "ReplayProgress":
        return replace(self, phase=ReplayPhase.MIGRATED)

    def failed(self) -> "ReplayProgress":
        return replace(self, phase=ReplayPhase.FAILED)
