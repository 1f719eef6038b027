"""
Medicine data-source adapters.

Every source answers one question, "what do you know about this medicine
name?", with a LookupResult. Sources never raise for lookup failures; they
report them inside the result so the router can always produce a reply.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import httpx

from medinfo.core.exceptions import LookupParseError
from medinfo.data import MedicineDataStore
from medinfo.logs import get_component_logger
from medinfo.models import LookupErrorKind, LookupResult, MedicineRecord


class MedicineDataSource(ABC):
    """Interface implemented by every medicine data source."""

    name: str = "source"

    @abstractmethod
    async def lookup(self, medicine_name: str) -> LookupResult:
        """Resolve a medicine name into a LookupResult."""
        pass


def result_from_envelope(payload: Dict[str, Any], source: Optional[str] = None) -> LookupResult:
    """
    Convert a lookup envelope ({found, medicine, suggestion, disclaimer}) into a LookupResult.

    Raises:
        LookupParseError: If the envelope claims a match but carries no usable record
    """
    if not isinstance(payload, dict):
        raise LookupParseError("Failed to parse medicine information")

    disclaimer = _optional_text(payload.get("disclaimer"))
    medicine = payload.get("medicine")

    if payload.get("found") is True or (payload.get("found") is None and medicine):
        if not isinstance(medicine, dict):
            raise LookupParseError("Failed to parse medicine information")
        try:
            record = MedicineRecord.from_payload(medicine)
        except (TypeError, ValueError) as e:
            raise LookupParseError("Failed to parse medicine information") from e
        return LookupResult.hit(record, disclaimer=disclaimer, source=source)

    return LookupResult.miss(
        suggestion=_optional_text(payload.get("suggestion")),
        disclaimer=disclaimer,
        source=source,
    )


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


class LocalMedicineSource(MedicineDataSource):
    """Adapter over the in-memory sample data store."""

    name = "local"

    def __init__(self, store: Optional[MedicineDataStore] = None):
        self.store = store or MedicineDataStore()

    async def lookup(self, medicine_name: str) -> LookupResult:
        record = self.store.lookup_local(medicine_name)
        if record is None:
            return LookupResult.miss(source=self.name)
        return LookupResult.hit(record, source=self.name)


class HttpMedicineSource(MedicineDataSource):
    """
    Adapter for a deployed medicine lookup endpoint.

    Speaks the POST {medicineName} contract served by medinfo.api.server.
    """

    name = "http"

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 30.0,
        auth_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.auth_token = auth_token
        self.transport = transport
        self.logger = get_component_logger("HttpMedicineSource")

    async def lookup(self, medicine_name: str) -> LookupResult:
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.post(
                    self.url, json={"medicineName": medicine_name}, headers=headers
                )
        except httpx.TimeoutException:
            self.logger.warning(
                "Medicine lookup endpoint timed out",
                component="HttpMedicineSource",
                subcomponent="Lookup",
                url=self.url,
            )
            return LookupResult.failure(
                LookupErrorKind.TRANSPORT, "Medicine lookup timed out", source=self.name
            )
        except httpx.HTTPError as e:
            self.logger.warning(
                "Medicine lookup endpoint unreachable",
                component="HttpMedicineSource",
                subcomponent="Lookup",
                url=self.url,
                error=str(e),
            )
            return LookupResult.failure(
                LookupErrorKind.TRANSPORT, "Medicine lookup service is unavailable", source=self.name
            )

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            error = body.get("error") if isinstance(body, dict) else None
            error = error or f"Medicine lookup failed with status {response.status_code}"
            self.logger.warning(
                "Medicine lookup endpoint returned an error",
                component="HttpMedicineSource",
                subcomponent="Lookup",
                status_code=response.status_code,
                error=error,
            )
            return LookupResult.failure(_error_kind_for(error), error, source=self.name)

        try:
            return result_from_envelope(body, source=self.name)
        except LookupParseError as e:
            return LookupResult.failure(e.kind, e.message, source=self.name)


def _error_kind_for(error: str) -> LookupErrorKind:
    lowered = error.lower()
    if "configuration" in lowered or "config error" in lowered:
        return LookupErrorKind.CONFIGURATION
    if "parse" in lowered:
        return LookupErrorKind.PARSE
    return LookupErrorKind.TRANSPORT


class ChainedMedicineSource(MedicineDataSource):
    """
    Tries sources in order and returns the first match.

    A source that raises counts as a transport failure and the chain moves
    on. When nothing matches, the most informative negative wins: the first
    result carrying a suggestion, else the first failure, else the last result.
    """

    name = "chain"

    def __init__(self, sources: Sequence[MedicineDataSource]):
        if not sources:
            raise ValueError("ChainedMedicineSource needs at least one source")
        self.sources: List[MedicineDataSource] = list(sources)
        self.logger = get_component_logger("ChainedMedicineSource")

    async def lookup(self, medicine_name: str) -> LookupResult:
        results: List[LookupResult] = []
        for source in self.sources:
            try:
                result = await source.lookup(medicine_name)
            except Exception as e:
                self.logger.error(
                    "Data source raised during lookup",
                    component="ChainedMedicineSource",
                    subcomponent="Lookup",
                    source=source.name,
                    error=str(e),
                    exc_info=True,
                )
                result = LookupResult.failure(
                    LookupErrorKind.TRANSPORT, str(e) or type(e).__name__, source=source.name
                )
            if result.found:
                return result
            results.append(result)

        for result in results:
            if result.suggestion:
                return result
        for result in results:
            if result.failed:
                return result
        return results[-1]
