"""In-memory contract service served through ``httpx.MockTransport``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

import httpx

from firetruck.config import ServiceConfig
from firetruck.values import RecordValue, Value, encode_value, qual


def event(tag: str, **fields: Value) -> RecordValue:
    return RecordValue(qual(tag), fields)


@dataclass
class FakeContract:
    id: str
    name: str = "contract"
    declaration_id: str = "decl-1"
    events: list[dict[str, Any]] = field(default_factory=list)
    residual: str = "success"


class FakeContractService:
    """Minimal stand-in for the contract service REST API.

    ``reports`` maps ``(contract_id, csl)`` (contract_id None for global
    reports) to an encoded value, or to an ``(status, body)`` tuple for an
    error response. ``reject_event`` decides, per contract and event index,
    whether an applied event is refused.
    """

    def __init__(self) -> None:
        self.contracts: dict[str, FakeContract] = {}
        self.declarations: dict[str, str] = {}
        self.reports: dict[tuple[Optional[str], str], Any] = {}
        self.reject_event: Callable[[str, int], bool] = lambda contract_id, index: False
        self.requests: list[httpx.Request] = []

    def add_contract(self, contract_id: str, events: Sequence[Value] = (), **kwargs: Any) -> FakeContract:
        contract = FakeContract(contract_id, events=[encode_value(e) for e in events], **kwargs)
        self.contracts[contract_id] = contract
        return contract

    def config(self, base_url: str = "http://contracts.test", **kwargs: Any) -> ServiceConfig:
        return ServiceConfig(base_url=base_url, transport=httpx.MockTransport(self.handle), **kwargs)

    def applied_requests(self, contract_id: str) -> list[dict[str, Any]]:
        path = f"/contracts/{contract_id}/events"
        return [json.loads(r.content)["record"] for r in self.requests if r.url.path == path]

    # -- routing ----------------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        body = json.loads(request.content) if request.content else None

        if parts == ["contracts"]:
            if request.method == "GET":
                return httpx.Response(200, json=[self._contract_json(c) for c in self.contracts.values()])
            return self._instantiate(body)
        if parts == ["report"]:
            return self._report(None, body)
        if parts[0] == "declarations" and len(parts) == 2:
            if parts[1] not in self.declarations:
                return httpx.Response(404, json={"message": "Declaration not found"})
            return httpx.Response(200, json={"id": parts[1], "csl": self.declarations[parts[1]]})

        contract = self.contracts.get(parts[1]) if len(parts) >= 2 else None
        if contract is None:
            return httpx.Response(404, json={"message": "Contract not found"})
        if len(parts) == 2:
            return httpx.Response(200, json=self._contract_json(contract))
        if parts[2] == "src":
            simplified = request.url.params.get("simplified") == "true"
            text = f"simplified {contract.residual}" if simplified else contract.residual
            return httpx.Response(200, json={"csl": text})
        if parts[2] == "report":
            return self._report(contract, body)
        if parts[2] == "events":
            index = len(contract.events)
            if self.reject_event(contract.id, index):
                return httpx.Response(400, json={"message": f"Event {index} rejected"})
            contract.events.append(body["record"])
            return httpx.Response(201)
        return httpx.Response(404)

    def _contract_json(self, contract: FakeContract) -> dict[str, Any]:
        return {
            "id": contract.id,
            "name": contract.name,
            "declarationId": contract.declaration_id,
            "peers": [],
        }

    def _instantiate(self, body: dict[str, Any]) -> httpx.Response:
        if body["declarationId"] not in self.declarations:
            return httpx.Response(404, json={"message": "Declaration not found"})
        contract_id = f"contract-{len(self.contracts) + 1}"
        self.contracts[contract_id] = FakeContract(contract_id, name=body["name"], declaration_id=body["declarationId"])
        return httpx.Response(201, json={"contractId": contract_id})

    def _report(self, contract: Optional[FakeContract], body: dict[str, Any]) -> httpx.Response:
        csl = body["csl"]
        key = (contract.id if contract else None, csl)
        if key in self.reports:
            result = self.reports[key]
            if isinstance(result, tuple):
                status, payload = result
                return httpx.Response(status, json=payload)
            return httpx.Response(200, json=result)
        if contract is not None and csl == "events":
            return httpx.Response(200, json={"class": "ListValue", "elements": list(contract.events)})
        if contract is not None and csl == "List::length events":
            return httpx.Response(200, json={"class": "IntValue", "i": len(contract.events)})
        return httpx.Response(400, json={"message": f"Cannot evaluate: {csl}"})
