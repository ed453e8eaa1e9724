"""Remote access layer for the contract service."""

from .client import EVENT_COUNT_EXPRESSION, ContractServiceClient
from .models import (
    Contract,
    ContractReport,
    Declaration,
    EventApplication,
    InstantiateResult,
    ResidualSource,
)

__all__ = [
    "EVENT_COUNT_EXPRESSION",
    "ContractServiceClient",
    "Contract",
    "ContractReport",
    "Declaration",
    "EventApplication",
    "InstantiateResult",
    "ResidualSource",
]
