"""Beginner-friendly overview for this module.

WHAT: The five REST endpoints under ``/instruments``.
WHEN: ``build_router`` is called once by the app factory.
WHY: Keeps HTTP concerns (path parsing, status codes, bodies) out of the
service and the store.
HOW: Each handler pulls the ``InstrumentService`` off ``app.state`` and
delegates. Failures surface as typed exceptions that the handlers in
``core.errors`` turn into status codes.
"""


from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..schemas.instrument import InstrumentIn, InstrumentOut
from ..services.instruments import InstrumentService


def get_service(request: Request) -> InstrumentService:
    return request.app.state.instrument_service


def api_list(service: InstrumentService = Depends(get_service)) -> list[InstrumentOut]:
    return service.list_instruments()


def api_get(instrument_id: str, service: InstrumentService = Depends(get_service)) -> InstrumentOut:
    return service.get_instrument(instrument_id)


def api_create(payload: InstrumentIn, service: InstrumentService = Depends(get_service)) -> InstrumentOut:
    return service.create_instrument(payload)


def api_replace(
    instrument_id: str,
    payload: InstrumentIn,
    service: InstrumentService = Depends(get_service),
) -> InstrumentOut:
    return service.replace_instrument(instrument_id, payload)


def api_delete(instrument_id: str, service: InstrumentService = Depends(get_service)) -> InstrumentOut:
    return service.delete_instrument(instrument_id)


def build_router() -> APIRouter:
    router = APIRouter(prefix="/instruments", tags=["instruments"])
    router.add_api_route("", api_list, methods=["GET"], response_model=list[InstrumentOut])
    router.add_api_route("", api_create, methods=["POST"], response_model=InstrumentOut, status_code=201)
    router.add_api_route("/{instrument_id}", api_get, methods=["GET"], response_model=InstrumentOut)
    router.add_api_route("/{instrument_id}", api_replace, methods=["PUT"], response_model=InstrumentOut)
    router.add_api_route("/{instrument_id}", api_delete, methods=["DELETE"], response_model=InstrumentOut)
    return router
