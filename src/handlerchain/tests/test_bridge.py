"""Tests for bridging a plain chain into a context-aware chain."""

from __future__ import annotations

import pytest

from handlerchain import (
    BridgeChain,
    Chain,
    ChainException,
    Context,
    ContextChain,
    ErrorCode,
    Request,
    Response,
    background,
    bind_context,
)
from handlerchain.testing import MockContextHandler, MockHandler, context_tag, tag


def writing_transformer(calls: list[str] | None = None):
    """Transformer that writes "ctx\\n" at the seam and binds a background context."""
    def transformer(next_handler):
        if calls is not None:
            calls.append("transform")

        async def handler(request: Request, response: Response) -> None:
            response.write("ctx\n")
            await next_handler(background(), request, response)
        return handler
    return transformer


async def ctx_app(ctx: Context, request: Request, response: Response) -> None:
    response.write("app\n")


def test_contextualize_captures_chain_and_transformer() -> None:
    c1, c2 = tag("t1\n"), tag("t2\n")
    transformer = writing_transformer()

    bridge = Chain(c1, c2).contextualize(transformer)

    assert isinstance(bridge, BridgeChain)
    assert bridge.transformer is transformer
    assert bridge.chain.constructors == (c1, c2)
    assert isinstance(bridge.context_chain, ContextChain)
    assert len(bridge.context_chain) == 0


@pytest.mark.asyncio
async def test_append_context() -> None:
    c1, c2 = tag("t1\n"), tag("t2\n")
    bridge = Chain(c1, c2).contextualize(writing_transformer())
    bridge = bridge.append(context_tag("ct1\n"), context_tag("ct2\n"))

    assert bridge.chain.constructors == (c1, c2)
    assert len(bridge.context_chain) == 2

    response = Response()
    await bridge.then_func(ctx_app)(Request(), response)

    assert response.text == "t1\nt2\nctx\nct1\nct2\napp\n"


def test_append_respects_immutability() -> None:
    bridge = Chain(tag("t1\n")).contextualize(writing_transformer())
    extended = bridge.append(context_tag("ct1\n"))

    assert len(bridge.context_chain) == 0
    assert len(extended.context_chain) == 1
    assert extended.chain is bridge.chain
    assert extended.transformer is bridge.transformer


def test_transformer_runs_once_per_resolution() -> None:
    calls: list[str] = []
    bridge = Chain(tag("t1\n")).contextualize(writing_transformer(calls)).append(context_tag("ct1\n"))

    bridge.then(ctx_app)
    assert calls == ["transform"]

    bridge.then(ctx_app)
    bridge.then_func(ctx_app)
    assert calls == ["transform"] * 3


@pytest.mark.asyncio
async def test_then_treats_none_as_default() -> None:
    bridge = Chain(tag("t1\n")).contextualize(writing_transformer())

    for handler in (bridge.then(None), bridge.then_func(None)):
        response = Response()
        await handler(Request(), response)
        assert response.text == "t1\nctx\n404 page not found\n"


@pytest.mark.asyncio
async def test_bridge_keeps_endwares_of_plain_chain() -> None:
    e1 = MockHandler(body="e1\n")
    bridge = Chain(tag("t1\n")).after(e1).contextualize(bind_context()).append(context_tag("ct1\n"))

    response = Response()
    await bridge.then(ctx_app)(Request(), response)

    assert response.text == "t1\nct1\napp\ne1\n"


@pytest.mark.asyncio
async def test_bind_context_gives_each_request_a_fresh_context() -> None:
    def remember(next_handler):
        async def handler(ctx: Context, request: Request, response: Response) -> None:
            ctx["seen"] = ctx.get("seen", 0) + 1
            await next_handler(ctx, request, response)
        return handler

    terminal = MockContextHandler()
    handler = Chain().contextualize(bind_context()).append(remember).then(terminal)

    await handler(Request(), Response())
    await handler(Request(), Response())

    assert [call.ctx["seen"] for call in terminal.invocations] == [1, 1]
    assert terminal.invocations[0].ctx is not terminal.invocations[1].ctx


@pytest.mark.asyncio
async def test_bind_context_uses_factory() -> None:
    terminal = MockContextHandler()
    transformer = bind_context(lambda request: Context({"path": request.url}))

    await Chain().contextualize(transformer).then(terminal)(Request(url="/profile"), Response())

    assert terminal.last_call.ctx["path"] == "/profile"


def test_contextualize_rejects_non_callable_transformer() -> None:
    with pytest.raises(ChainException) as info:
        Chain().contextualize(None)  # type: ignore[arg-type]
    assert info.value.code == ErrorCode.NOT_CALLABLE


def test_then_rejects_transformer_returning_non_handler() -> None:
    bridge = Chain().contextualize(lambda handler: "oops")

    with pytest.raises(ChainException) as info:
        bridge.then(ctx_app)
    assert info.value.code == ErrorCode.INVALID_HANDLER
