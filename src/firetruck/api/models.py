"""Response models for the contract service REST API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..values import Value


class _ServiceModel(BaseModel):
    # The service adds fields between versions; unknown keys are kept, not rejected.
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Contract(_ServiceModel):
    """An instantiated contract as listed by the service."""

    id: str = Field(..., min_length=1, description="Opaque contract id")
    name: Optional[str] = Field(None, description="Human readable contract name")
    declaration_id: Optional[str] = Field(
        None,
        alias="declarationId",
        description="Declaration the contract was instantiated from",
    )
    entry_point: Optional[dict[str, Any]] = Field(
        None,
        alias="entryPoint",
        description="Qualified name of the template that was instantiated",
    )
    peers: List[str] = Field(default_factory=list, description="Peer ids taking part in the contract")


class ResidualSource(_ServiceModel):
    """Remaining obligations of a contract, as source text."""

    csl: str


class Declaration(_ServiceModel):
    id: Optional[str] = None
    name: Optional[str] = None
    csl: str = Field(..., description="Source text of the declaration")


class InstantiateResult(_ServiceModel):
    contract_id: str = Field(..., alias="contractId", min_length=1)


@dataclass(frozen=True)
class EventApplication:
    """Outcome of applying one event to a contract.

    A rejection by the service is an ordinary outcome here; callers decide
    whether it is an error. ``payload`` holds the server's diagnostic body.
    """

    ok: bool
    status_code: int
    payload: Any = None

    def describe(self) -> str:
        return f"HTTP {self.status_code}: {self.payload}"


@dataclass(frozen=True)
class ContractReport:
    """Result of a report on one contract; ``value`` is None if it failed."""

    contract_id: str
    value: Optional["Value"]
