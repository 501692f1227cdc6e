"""handlerchain - Painless, immutable middleware chaining for async handlers.

Compose middleware constructors (``handler -> handler`` functions) and
endwares around a terminal handler, producing a single handler.

Quick Start:
    >>> from handlerchain import Chain
    >>>
    >>> def timing(next_handler):
    ...     async def handler(request, response):
    ...         started = time.perf_counter()
    ...         await next_handler(request, response)
    ...         response.headers["X-Elapsed"] = f"{time.perf_counter() - started:.4f}"
    ...     return handler
    >>>
    >>> async def app(request, response):
    ...     response.write("hello\\n")
    >>>
    >>> std = Chain(ratelimit, timing).after(access_log)
    >>> handler = std.then(app)          # ratelimit -> timing -> app -> access_log
    >>> fallback = std.then()            # ... -> default_handler (404)

Extending:
    >>> api = std.append(auth)                       # ratelimit -> timing -> auth
    >>> full = std.extend(Chain(csrf).after(audit))  # endwares merged in order

Context-aware tail:
    >>> from handlerchain import bind_context
    >>> handler = (
    ...     Chain(ratelimit)
    ...     .contextualize(bind_context())   # fresh Context per request
    ...     .append(load_user)               # (ctx, request, response) middleware
    ...     .then(profile_page)
    ... )

Client side:
    >>> from handlerchain import TransportChain
    >>> transport = TransportChain(retry, add_auth_header).then()  # -> httpx
"""

from __future__ import annotations

__version__ = "1.1.0"

# Collaborators
from .http import (
    Handler,
    HandlerFunc,
    HttpxTransport,
    NotFoundHandler,
    Request,
    Response,
    RoundTripper,
    default_handler,
    default_transport,
)
from .context import Context, ContextHandler, background, default_context_handler

# Chains
from .chain import (
    BaseChain,
    BridgeChain,
    Chain,
    Constructor,
    ContextChain,
    ContextConstructor,
    Endware,
    EndwareHandler,
    ToContextConstructor,
    TransportChain,
    bind_context,
)

# Errors
from .errors import ChainError, ChainException, ErrorCode

# Config
from .config import HandlerChainSettings, clear_settings_cache, get_settings
from .log import configure_logging

__all__ = [
    "__version__",
    # Collaborators
    "Handler",
    "HandlerFunc",
    "HttpxTransport",
    "NotFoundHandler",
    "Request",
    "Response",
    "RoundTripper",
    "default_handler",
    "default_transport",
    "Context",
    "ContextHandler",
    "background",
    "default_context_handler",
    # Chains
    "BaseChain",
    "BridgeChain",
    "Chain",
    "Constructor",
    "ContextChain",
    "ContextConstructor",
    "Endware",
    "EndwareHandler",
    "ToContextConstructor",
    "TransportChain",
    "bind_context",
    # Errors
    "ChainError",
    "ChainException",
    "ErrorCode",
    # Config
    "HandlerChainSettings",
    "clear_settings_cache",
    "get_settings",
    "configure_logging",
]
