"""Request/response collaborators that chains compose over.

Two handler capabilities are modelled:

- ``Handler``: server side, ``async (request, response) -> None``. The handler
  writes into a shared ``Response``; endwares see the same objects afterwards.
- ``RoundTripper``: client side, ``async (request) -> Response``.

Errors follow the usual Python convention: a handler that fails raises.

The module also provides the fallbacks used when a chain is resolved without
a terminal: ``default_handler`` (a not-found responder) and
``default_transport`` (an httpx-backed round tripper). Both are module-level
singletons so identity comparisons are meaningful.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

import httpx

from .config import TransportSettings, get_settings

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger("handlerchain.http")


@dataclass(slots=True)
class Request:
    """An inbound (server) or outbound (transport) request."""

    method: str = "GET"
    url: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass(slots=True)
class Response:
    """Mutable response shared by a handler and its endwares.

    The status can be set once, either explicitly through ``write_header`` or
    implicitly (as 200) by the first ``write``.

    Example:
        >>> resp = Response()
        >>> resp.write("hello\\n")
        6
        >>> resp.text
        'hello\\n'
    """

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytearray = field(default_factory=bytearray)
    _header_written: bool = field(default=False, init=False, repr=False)

    def write_header(self, status: int) -> None:
        if self._header_written:
            logger.debug(f"Superfluous write_header({status}) ignored, status already {self.status}")
            return
        self.status = status
        self._header_written = True

    def write(self, data: bytes | str) -> int:
        if isinstance(data, str):
            data = data.encode()
        self._header_written = True
        self.body.extend(data)
        return len(data)

    @property
    def written(self) -> bool:
        """Whether a status or any body bytes have been written."""
        return self._header_written

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@runtime_checkable
class Handler(Protocol):
    """Server-side request handler."""

    async def __call__(self, request: Request, response: Response) -> None: ...


@runtime_checkable
class RoundTripper(Protocol):
    """Client-side transport: sends a request, returns its response."""

    async def __call__(self, request: Request) -> Response: ...


@dataclass(frozen=True, slots=True)
class HandlerFunc:
    """Adapt a plain function, sync or async, to an async handler capability.

    Works for any handler shape: the wrapped function receives the same
    arguments and its result (awaited when needed) is returned.

    Example:
        >>> def hello(request, response):
        ...     response.write("hello")
        >>> handler = HandlerFunc(hello)  # now awaitable: await handler(req, resp)
    """

    fn: Callable[..., Any]

    async def __call__(self, *args: Any) -> Any:
        result = self.fn(*args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"HandlerFunc({getattr(self.fn, '__qualname__', self.fn)!r})"


class NotFoundHandler:
    """Fallback handler: answers every request with the configured not-found response."""

    __slots__ = ()

    async def __call__(self, request: Request, response: Response) -> None:
        cfg = get_settings().default
        response.headers.setdefault("Content-Type", cfg.content_type)
        response.write_header(cfg.status)
        response.write(cfg.body)

    def __repr__(self) -> str:
        return "default_handler"


class HttpxTransport:
    """Round tripper that performs requests over the network with httpx.

    The ``httpx.AsyncClient`` is created lazily on first use and reused
    while the same event loop is running. Pooled connections belong to the
    loop that opened them, so a call from another loop (a later
    ``asyncio.run``) drops the old client and builds a new one. Call
    ``aclose()`` to release it.

    Args:
        transport: Optional httpx transport (e.g. ``httpx.MockTransport`` in tests)
        settings: Client options (default: ``get_settings().transport``)
    """

    __slots__ = ("_transport", "_settings", "_client", "_loop")

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        settings: TransportSettings | None = None,
    ) -> None:
        self._transport = transport
        self._settings = settings
        self._client: httpx.AsyncClient | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def _get_client(self) -> httpx.AsyncClient:
        loop = asyncio.get_running_loop()
        if self._client is not None and self._loop is not loop:
            logger.debug("Event loop changed, discarding httpx client bound to the previous loop")
            self._client = None
        if self._client is None:
            cfg = self._settings or get_settings().transport
            self._client = httpx.AsyncClient(
                transport=self._transport,
                timeout=cfg.timeout,
                follow_redirects=cfg.follow_redirects,
                verify=cfg.verify_ssl,
            )
            self._loop = loop
        return self._client

    async def __call__(self, request: Request) -> Response:
        client = self._get_client()
        resp = await client.request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body or None,
        )
        response = Response(headers=dict(resp.headers))
        response.write_header(resp.status_code)
        response.body.extend(resp.content)
        return response

    async def aclose(self) -> None:
        """Close the underlying httpx client, if one was created."""
        if self._client is not None:
            if self._loop is asyncio.get_running_loop():
                await self._client.aclose()
            self._client = None
            self._loop = None

    def __repr__(self) -> str:
        return "default_transport" if self is default_transport else "HttpxTransport()"


default_handler = NotFoundHandler()
default_transport = HttpxTransport()
