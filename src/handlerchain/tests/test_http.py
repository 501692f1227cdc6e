"""Tests for request/response collaborators and function adapters."""

from __future__ import annotations

import pytest

from handlerchain import Handler, HandlerFunc, NotFoundHandler, Request, Response, RoundTripper, default_handler
from handlerchain.testing import MockHandler, MockTransport


def test_response_write_sets_implicit_status() -> None:
    response = Response()
    assert not response.written

    assert response.write("hi") == 2
    response.write(b" there")

    assert response.written
    assert response.status == 200
    assert response.text == "hi there"


def test_response_write_header_only_once() -> None:
    response = Response()
    response.write_header(201)
    response.write_header(500)

    assert response.status == 201


def test_request_defaults() -> None:
    request = Request()
    assert (request.method, request.url, request.headers, request.body) == ("GET", "/", {}, b"")
    assert Request().headers is not request.headers


@pytest.mark.asyncio
async def test_handler_func_awaits_coroutines_and_passes_plain_results() -> None:
    async def coro(x: int) -> int:
        return x + 1

    assert await HandlerFunc(coro)(1) == 2
    assert await HandlerFunc(lambda x: x * 2)(4) == 8


def test_handler_func_repr() -> None:
    def index(request: Request, response: Response) -> None: ...

    assert "index" in repr(HandlerFunc(index))


def test_protocols_are_runtime_checkable() -> None:
    assert isinstance(MockHandler(), Handler)
    assert isinstance(MockTransport(), RoundTripper)
    assert isinstance(default_handler, NotFoundHandler)
    assert repr(default_handler) == "default_handler"


@pytest.mark.asyncio
async def test_mock_handler_records_invocations() -> None:
    handler = MockHandler(body="x", status=202)
    handler.assert_not_called()

    request, response = Request(url="/a"), Response()
    await handler(request, response)

    handler.assert_called()
    handler.assert_called_times(1)
    assert handler.last_call.request is request
    assert response.status == 202
    with pytest.raises(AssertionError):
        handler.assert_called_times(2)
