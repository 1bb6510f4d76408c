"""Pydantic schemas that describe instrument payloads for the API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class InstrumentIn(BaseModel):
    """Body of ``POST /instruments`` and ``PUT /instruments/{id}``.

    Every field is required; replace overwrites the whole record. An ``id``
    in the body is ignored, the store assigns it. ``price`` must be finite:
    inf and nan have no JSON encoding.
    """

    name: str
    type: str
    price: float = Field(allow_inf_nan=False)
    description: str


class InstrumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    price: float
    description: str
