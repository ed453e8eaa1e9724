"""Async client for the contract service REST API.

Every operation is one HTTP round trip (``map_report`` fans out to many).
Unsuccessful responses are normalized into the :mod:`firetruck.errors`
hierarchy; ``apply_event`` is the exception and reports rejections as an
:class:`~firetruck.api.models.EventApplication` so the caller can attach
the offending event to the error.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ..config import ServiceConfig
from ..errors import EvaluationError, FiretruckError, NotFoundError, TransportError
from ..values import (
    QualifiedName,
    RecordValue,
    Value,
    ValueComparer,
    decode_value,
    encode_value,
    render_value,
    sort_values,
    value_to_json,
)
from ..values.codec import encode_qualified_name
from .models import (
    Contract,
    ContractReport,
    Declaration,
    EventApplication,
    InstantiateResult,
    ResidualSource,
)

logger = logging.getLogger(__name__)

EVENT_COUNT_EXPRESSION = "List::length events"


def _contract_path(contract_id: str, *suffix: str) -> str:
    return "/".join(("/contracts", quote(contract_id, safe=""), *suffix))


def _diagnostic(response: httpx.Response) -> str:
    """Best-effort server message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    return str(body)


class ContractServiceClient:
    """Typed operations against one contract service.

    Use as an async context manager so the underlying connection pool is
    closed::

        async with ContractServiceClient(config) as service:
            ids = await service.contract_ids()
    """

    def __init__(self, config: ServiceConfig):
        self.config = config
        self._http_client: Optional[httpx.AsyncClient] = None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                transport=self.config.transport,
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "ContractServiceClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.aclose()
        return False

    # -- plumbing -------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s%s", method, self.config.base_url, path)
        try:
            response = await self._get_http_client().request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(f"Cannot reach contract service at {self.config.base_url}: {exc}") from exc
        if not response.is_success:
            logger.debug("%s %s returned HTTP %s", method, path, response.status_code)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"Invalid JSON in response from {response.request.url}: {response.text[:200]!r}"
            ) from exc

    def _check(self, response: httpx.Response, kind: str, identifier: str | None) -> None:
        if response.is_success:
            return
        if response.status_code == 404 and identifier is not None:
            raise NotFoundError(kind, identifier)
        subject = kind if identifier is None else f"{kind} {identifier}"
        raise TransportError(
            f"Bad response from server for {subject}: "
            f"HTTP {response.status_code}: {_diagnostic(response)}"
        )

    def _parse(self, model: type[BaseModel], data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise TransportError(f"Unexpected {model.__name__} payload from server: {exc}") from exc

    # -- contracts ------------------------------------------------------------

    async def list_contracts(self) -> list[Contract]:
        response = await self._request("GET", "/contracts")
        self._check(response, "contracts", None)
        data = self._json(response)
        if not isinstance(data, list):
            raise TransportError(f"Bad response from server. Expected a list of contracts, got: {data!r}")
        return [self._parse(Contract, item) for item in data]

    async def contract_ids(self) -> list[str]:
        return [contract.id for contract in await self.list_contracts()]

    async def get_contract(self, contract_id: str) -> Contract:
        response = await self._request("GET", _contract_path(contract_id))
        self._check(response, "contract", contract_id)
        return self._parse(Contract, self._json(response))

    async def residual(self, contract_id: str, simplified: bool = False) -> ResidualSource:
        response = await self._request(
            "GET",
            _contract_path(contract_id, "src"),
            params={"simplified": "true" if simplified else "false"},
        )
        self._check(response, "contract", contract_id)
        return self._parse(ResidualSource, self._json(response))

    async def instantiate(
        self,
        declaration_id: str,
        name: str,
        declaration_expression_arguments: Sequence[Value],
        entry_point: QualifiedName,
        peers: Sequence[str],
    ) -> InstantiateResult:
        body = {
            "declarationExpressionArguments": [encode_value(arg) for arg in declaration_expression_arguments],
            "declarationId": declaration_id,
            "entryPoint": encode_qualified_name(entry_point),
            "name": name,
            "peers": list(peers),
        }
        response = await self._request("POST", "/contracts", json=body)
        self._check(response, "declaration", declaration_id)
        return self._parse(InstantiateResult, self._json(response))

    async def get_declaration(self, declaration_id: str) -> Declaration:
        response = await self._request("GET", f"/declarations/{quote(declaration_id, safe='')}")
        self._check(response, "declaration", declaration_id)
        return self._parse(Declaration, self._json(response))

    async def apply_event(self, contract_id: str, record: RecordValue) -> EventApplication:
        response = await self._request(
            "POST",
            _contract_path(contract_id, "events"),
            json={"record": encode_value(record)},
        )
        try:
            payload: Any = response.json() if response.content else None
        except ValueError:
            payload = response.text
        return EventApplication(ok=response.is_success, status_code=response.status_code, payload=payload)

    # -- reports --------------------------------------------------------------

    async def report(
        self,
        expression: str,
        contract_id: str | None = None,
        values: Sequence[Value] = (),
    ) -> Value:
        """Evaluate ``expression`` on a contract, or globally when no id is given.

        Raises:
            NotFoundError: The contract id is unknown.
            EvaluationError: The service could not evaluate the expression.
            TransportError: The request failed or the result was malformed.
        """
        path = "/report" if contract_id is None else _contract_path(contract_id, "report")
        body = {"csl": expression, "values": [encode_value(value) for value in values]}
        response = await self._request("POST", path, json=body)
        if response.status_code == 404 and contract_id is not None:
            raise NotFoundError("contract", contract_id)
        if not response.is_success:
            raise EvaluationError(expression, _diagnostic(response), response.status_code)
        return decode_value(self._json(response))

    async def report_rendered(
        self,
        expression: str,
        contract_id: str | None = None,
        values: Sequence[Value] = (),
    ) -> str:
        return render_value(await self.report(expression, contract_id, values))

    async def report_maybe(
        self,
        expression: str,
        contract_id: str,
        values: Sequence[Value] = (),
    ) -> Optional[Value]:
        """Like :meth:`report`, but a failure for this contract yields None."""
        try:
            return await self.report(expression, contract_id, values)
        except FiretruckError as exc:
            logger.debug("Report on contract %s yielded no value: %s", contract_id, exc)
            return None

    async def number_of_events(self, contract_id: str) -> int:
        count = value_to_json(await self.report(EVENT_COUNT_EXPRESSION, contract_id))
        if not isinstance(count, int) or isinstance(count, bool):
            raise TransportError(f"Event count of contract {contract_id} is not an integer: {count!r}")
        return count

    async def map_report(
        self,
        contract_ids_and_values: Sequence[tuple[str, Sequence[Value]]],
        expression: str,
    ) -> list[ContractReport]:
        """Evaluate ``expression`` on many contracts concurrently.

        At most ``config.max_concurrency`` requests are in flight. Results
        keep the order of ``contract_ids_and_values``.
        """
        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        async def _one(contract_id: str, values: Sequence[Value]) -> ContractReport:
            async with semaphore:
                value = await self.report_maybe(expression, contract_id, values)
            return ContractReport(contract_id, value)

        return list(
            await asyncio.gather(*(_one(contract_id, values) for contract_id, values in contract_ids_and_values))
        )

    async def sort_by_report(
        self,
        contract_ids_and_values: Sequence[tuple[str, Sequence[Value]]],
        expression: str,
        comparer: ValueComparer,
    ) -> list[ContractReport]:
        reports = await self.map_report(contract_ids_and_values, expression)
        return sort_values(reports, comparer, key=lambda report: report.value)
