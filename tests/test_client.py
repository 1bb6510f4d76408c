"""Tests for the async REST client, driven through ``httpx.MockTransport``."""

import asyncio
import json
import logging

import httpx
import pytest

from instruments_api.client import InstrumentClient, InstrumentClientError
from instruments_api.schemas.instrument import InstrumentIn

GUITAR = {"id": 1, "name": "Guitar", "type": "String", "price": 199.99, "description": "6-string"}


def make_client(handler) -> InstrumentClient:
    return InstrumentClient("http://api.test/", transport=httpx.MockTransport(handler))


def test_requests_carry_json_headers_and_hit_expected_paths():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, request.headers))
        if request.method == "GET" and request.url.path == "/instruments":
            return httpx.Response(200, json=[GUITAR])
        if request.method == "POST":
            body = json.loads(request.content)
            return httpx.Response(201, json={"id": 1, **body})
        return httpx.Response(200, json=GUITAR)

    async def scenario():
        async with make_client(handler) as client:
            listed = await client.list_instruments()
            created = await client.create_instrument(
                InstrumentIn(name="Guitar", type="String", price=199.99, description="6-string")
            )
            fetched = await client.get_instrument(1)
            updated = await client.update_instrument(1, {**GUITAR, "price": 199.99})
            deleted = await client.delete_instrument(1)
        return listed, created, fetched, updated, deleted

    listed, created, fetched, updated, deleted = asyncio.run(scenario())

    assert [item.model_dump() for item in listed] == [GUITAR]
    assert created.model_dump() == GUITAR
    assert fetched == updated == deleted == created
    assert [(method, path) for method, path, _ in seen] == [
        ("GET", "/instruments"),
        ("POST", "/instruments"),
        ("GET", "/instruments/1"),
        ("PUT", "/instruments/1"),
        ("DELETE", "/instruments/1"),
    ]
    for _, _, headers in seen:
        assert headers["accept"] == "application/json"
        assert headers["content-type"] == "application/json"


@pytest.mark.parametrize(
    "call, message",
    [
        (lambda c: c.list_instruments(), "could not fetch instruments"),
        (lambda c: c.get_instrument(9), "could not fetch instrument"),
        (lambda c: c.create_instrument(GUITAR), "could not create instrument"),
        (lambda c: c.update_instrument(9, GUITAR), "could not update instrument"),
        (lambda c: c.delete_instrument(9), "could not delete instrument"),
    ],
)
def test_non_2xx_becomes_generic_error(call, message, caplog):
    def handler(request):
        return httpx.Response(404, json={"code": "not_found", "message": "Not found"})

    async def scenario():
        async with make_client(handler) as client:
            await call(client)

    with caplog.at_level(logging.ERROR, logger="instruments_api.client"):
        with pytest.raises(InstrumentClientError) as exc_info:
            asyncio.run(scenario())

    assert str(exc_info.value) == message
    assert exc_info.value.__cause__ is None
    assert "404" in caplog.text


def test_transport_error_becomes_generic_error(caplog):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        async with make_client(handler) as client:
            await client.list_instruments()

    with caplog.at_level(logging.ERROR, logger="instruments_api.client"):
        with pytest.raises(InstrumentClientError, match="could not fetch instruments"):
            asyncio.run(scenario())

    assert "connection refused" in caplog.text


def test_malformed_body_becomes_generic_error():
    def handler(request):
        return httpx.Response(200, json={"unexpected": True})

    async def scenario():
        async with make_client(handler) as client:
            await client.get_instrument(1)

    with pytest.raises(InstrumentClientError, match="could not fetch instrument"):
        asyncio.run(scenario())
