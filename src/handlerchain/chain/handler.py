"""Server-side handler chain with endware support."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from ..errors import ensure_callables
from ..http import Handler, HandlerFunc, Request, Response, default_handler
from .base import BaseChain, Constructor, logger
from .bridge import BridgeChain

if TYPE_CHECKING:
    from typing import Any, Self

    from .bridge import ToContextConstructor

# Endware runs after the main handler, against the same request/response.
# It can read what was written but should not expect to change what was sent.
Endware = Handler


@dataclass(frozen=True, slots=True)
class EndwareHandler:
    """Terminal adapter: serve ``handler``, then every endware in order.

    Endwares do not run when the handler raises.
    """

    handler: Handler
    endwares: tuple[Endware, ...]

    async def __call__(self, request: Request, response: Response) -> None:
        await self.handler(request, response)
        for endware in self.endwares:
            await endware(request, response)


class Chain(BaseChain[Handler]):
    """Immutable list of handler constructors plus trailing endwares.

        Chain(m1, m2, m3).after(e1, e2, e3).then(h)

    is equivalent to ``m1(m2(m3(h)))`` followed by e1, e2, e3: a request goes
    to m1, m2, m3, then h (which serves the response), then e1, e2, e3,
    assuming every middleware calls the next one.

    A chain can be reused by calling ``then()`` several times:

        std = Chain(ratelimit, csrf).after(access_log)
        index = std.then(index_handler)
        auth = std.then(auth_handler)

    ``then(None)`` resolves to ``default_handler``.
    """

    __slots__ = ("_endwares",)

    def __init__(self, *constructors: Constructor[Handler]) -> None:
        super().__init__(*constructors)
        self._endwares: tuple[Endware, ...] = ()

    @property
    def endwares(self) -> tuple[Endware, ...]:
        return self._endwares

    def __repr__(self) -> str:
        return f"Chain(constructors={len(self._constructors)}, endwares={len(self._endwares)})"

    def _default(self) -> Handler:
        return default_handler

    def _terminal(self, handler: Handler) -> Handler:
        if self._endwares:
            return EndwareHandler(handler, self._endwares)
        return handler

    def _derive(self, constructors: tuple[Constructor[Handler], ...]) -> Self:
        new = type(self)(*constructors)
        new._endwares = self._endwares
        return new

    def _with_endwares(self, endwares: tuple[Endware, ...]) -> Self:
        new = type(self)(*self._constructors)
        new._endwares = endwares
        return new

    def extend(self, other: Self) -> Self:
        """Return a new chain running ``other`` after this one.

            std = Chain(m1, m2)
            ext1 = Chain(m3, m4).after(e1, e2)
            ext2 = std.extend(ext1)
            # requests in std  go m1 -> m2 -> handler
            # requests in ext1 go m3 -> m4 -> handler -> e1 -> e2
            # requests in ext2 go m1 -> m2 -> m3 -> m4 -> handler -> e1 -> e2
        """
        self._check_same_kind("Chain.extend", other)
        return self.append(*other.constructors).append_endware(*other.endwares)

    def after(self, *endwares: Endware) -> Self:
        """Return a new chain with ``endwares`` run after the handler.

        Endwares execute after both the constructors and the ``then()``
        handler, in the order given.
        """
        ensure_callables("Chain.after", endwares, "endware")
        return self._with_endwares(self._endwares + tuple(endwares))

    def append_endware(self, *endwares: Endware) -> Self:
        """Return a new chain with ``endwares`` last in the request flow.

            std = Chain(m1).after(e1, e2)
            ext = std.append_endware(e3, e4)
            # requests in std go m1 -> handler -> e1 -> e2
            # requests in ext go m1 -> handler -> e1 -> e2 -> e3 -> e4
        """
        ensure_callables("Chain.append_endware", endwares, "endware")
        return type(self)(*self._constructors).after(*self._endwares, *endwares)

    def after_funcs(self, *fns: Callable[..., Any]) -> Self:
        """Like ``after``, but takes plain functions (sync or async)."""
        ensure_callables("Chain.after_funcs", fns, "endware")
        return self.after(*(HandlerFunc(fn) for fn in fns))

    def append_endware_funcs(self, *fns: Callable[..., Any]) -> Self:
        """Like ``append_endware``, but takes plain functions (sync or async)."""
        ensure_callables("Chain.append_endware_funcs", fns, "endware")
        return self.append_endware(*(HandlerFunc(fn) for fn in fns))

    def contextualize(self, transformer: ToContextConstructor) -> BridgeChain:
        """Continue this chain with context-aware constructors.

        ``transformer`` turns the fully composed context segment into an
        ordinary handler, typically by binding a context per request (see
        ``bind_context``). Constructors added to the returned bridge with
        ``append`` run after this chain's constructors and after the seam.
        """
        logger.debug(f"Chain.contextualize: bridging {self!r} via {transformer!r}")
        return BridgeChain(self, transformer)
