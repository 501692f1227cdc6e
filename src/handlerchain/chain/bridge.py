"""Bridge from a plain handler chain into a context-aware one.

    Chain(t1, t2).contextualize(bind_context()).append(ct1, ct2).then(app)

serves a request through t1 and t2, crosses the seam where the transformer
supplies a Context, then goes through ct1, ct2 and finally ``app``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from ..context import Context, ContextHandler, background
from ..errors import ensure_callables, ensure_handler
from ..http import Handler, HandlerFunc, Request, Response
from .contextual import ContextChain

if TYPE_CHECKING:
    from typing import Any

    from .contextual import ContextConstructor
    from .handler import Chain

# Turns a composed context-aware handler into an ordinary one.
ToContextConstructor = Callable[[ContextHandler], Handler]


class BridgeChain:
    """A plain chain, a transformer, and the context chain it leads into.

    Effectively immutable: ``append`` returns a new bridge and only ever grows
    the context segment. The plain segment always wraps the context segment.
    """

    __slots__ = ("_chain", "_transformer", "_context_chain")

    def __init__(
        self,
        chain: Chain,
        transformer: ToContextConstructor,
        context_chain: ContextChain | None = None,
    ) -> None:
        ensure_callables("Chain.contextualize", (transformer,), "transformer")
        self._chain = chain
        self._transformer = transformer
        self._context_chain = context_chain if context_chain is not None else ContextChain()

    @property
    def chain(self) -> Chain:
        return self._chain

    @property
    def transformer(self) -> ToContextConstructor:
        return self._transformer

    @property
    def context_chain(self) -> ContextChain:
        return self._context_chain

    def __repr__(self) -> str:
        return f"BridgeChain(chain={self._chain!r}, context_chain={self._context_chain!r})"

    def append(self, *constructors: ContextConstructor) -> BridgeChain:
        """Return a new bridge with context constructors added after the seam."""
        return BridgeChain(self._chain, self._transformer, self._context_chain.append(*constructors))

    def then(self, handler: ContextHandler | None = None) -> Handler:
        """Resolve both segments around a context-aware terminal.

        The context segment is composed first, passed through the transformer
        (once per call, never cached), and the result becomes the terminal of
        the plain segment.
        """
        contextual = self._context_chain.then(handler)
        bridged = self._transformer(contextual)
        ensure_handler("BridgeChain.then", bridged, self._transformer)
        return self._chain.then(bridged)

    def then_func(self, fn: Callable[..., Any] | None = None) -> Handler:
        """Like ``then``, but takes a plain ``(ctx, request, response)`` function."""
        if fn is None:
            return self.then(None)
        ensure_callables("BridgeChain.then_func", (fn,), "handler")
        return self.then(HandlerFunc(fn))  # type: ignore[arg-type]


def bind_context(factory: Callable[[Request], Context] | None = None) -> ToContextConstructor:
    """Build a transformer that supplies a Context for every request.

    Args:
        factory: Creates the context for a request (default: a fresh
            ``background()`` context, ignoring the request)

    Example:
        >>> per_request = bind_context(lambda req: Context({"path": req.url}))
        >>> handler = Chain().contextualize(per_request).then(app)
    """
    make = factory or (lambda request: background())

    def transformer(handler: ContextHandler) -> Handler:
        async def bound(request: Request, response: Response) -> None:
            await handler(make(request), request, response)
        return bound

    return transformer
