"""Contract state migration: extract, transform and replay event histories."""

from .engine import DEFAULT_EVENTS_EXPRESSION, MigrationEngine
from .state import ContractState, ReplayPhase, ReplayProgress
from .transforms import (
    ACCEPT_CAR_SHARE,
    KEY_LOCATION_FIELD,
    EventTransformation,
    add_empty_key_location,
    fill_missing_field,
    identity,
)

__all__ = [
    "DEFAULT_EVENTS_EXPRESSION",
    "MigrationEngine",
    "ContractState",
    "ReplayPhase",
    "ReplayProgress",
    "ACCEPT_CAR_SHARE",
    "KEY_LOCATION_FIELD",
    "EventTransformation",
    "add_empty_key_location",
    "fill_missing_field",
    "identity",
]
