"""Client-side chain of round tripper constructors."""

from __future__ import annotations

from typing import ClassVar

from ..http import RoundTripper, default_transport
from .base import BaseChain


class TransportChain(BaseChain[RoundTripper]):
    """Immutable list of round tripper constructors.

        TransportChain(m1, m2, m3).then(rt)

    is equivalent to ``m1(m2(m3(rt)))``: an outgoing request is passed to m1,
    then m2, then m3 and finally to the given round tripper.

    ``then(None)`` resolves to ``default_transport``, which sends the request
    over the network with httpx.

    Example:
        >>> def with_user_agent(next_rt):
        ...     async def rt(request):
        ...         request.headers.setdefault("User-Agent", "handlerchain")
        ...         return await next_rt(request)
        ...     return rt
        >>> transport = TransportChain(with_user_agent).then()
    """

    __slots__ = ()

    _kind: ClassVar[str] = "transport"

    def _default(self) -> RoundTripper:
        return default_transport
