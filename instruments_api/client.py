from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .schemas.instrument import InstrumentIn, InstrumentOut

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class InstrumentClientError(Exception):
    """Raised with a generic, operation-specific message when a call fails."""


class InstrumentClient:
    """Async client for the ``/instruments`` REST API.

    Any transport error, non-2xx status or malformed body is logged and turned
    into ``InstrumentClientError``; callers never see ``httpx`` exceptions.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=JSON_HEADERS,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "InstrumentClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_instruments(self) -> List[InstrumentOut]:
        data = await self._request("GET", "/instruments", error="could not fetch instruments")
        try:
            return [InstrumentOut.model_validate(item) for item in data]
        except (TypeError, ValueError) as exc:
            self._log_failure("could not fetch instruments", exc)
            raise InstrumentClientError("could not fetch instruments") from None

    async def get_instrument(self, instrument_id: int) -> InstrumentOut:
        return await self._one("GET", f"/instruments/{instrument_id}", error="could not fetch instrument")

    async def create_instrument(self, fields: InstrumentIn | Dict[str, Any]) -> InstrumentOut:
        return await self._one(
            "POST", "/instruments", json=_payload(fields), error="could not create instrument"
        )

    async def update_instrument(self, instrument_id: int, fields: InstrumentIn | Dict[str, Any]) -> InstrumentOut:
        return await self._one(
            "PUT",
            f"/instruments/{instrument_id}",
            json=_payload(fields),
            error="could not update instrument",
        )

    async def delete_instrument(self, instrument_id: int) -> InstrumentOut:
        return await self._one("DELETE", f"/instruments/{instrument_id}", error="could not delete instrument")

    async def _one(self, method: str, path: str, *, error: str, json: Any = None) -> InstrumentOut:
        data = await self._request(method, path, json=json, error=error)
        try:
            return InstrumentOut.model_validate(data)
        except ValueError as exc:
            self._log_failure(error, exc)
            raise InstrumentClientError(error) from None

    async def _request(self, method: str, path: str, *, error: str, json: Any = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            self._log_failure(error, exc)
            raise InstrumentClientError(error) from None

    @staticmethod
    def _log_failure(error: str, exc: Exception) -> None:
        if isinstance(exc, httpx.HTTPStatusError):
            logger.error("%s: server answered %s", error, exc.response.status_code)
        else:
            logger.error("%s: %s", error, exc)


def _payload(fields: InstrumentIn | Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(fields, InstrumentIn):
        return fields.model_dump()
    return dict(fields)
