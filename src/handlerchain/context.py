"""Request-scoped context threaded explicitly through context-aware handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .http import Request, Response, default_handler


@dataclass(slots=True)
class Context:
    """Request-scoped value bag passed as the first argument of a ContextHandler.

    Carries state between middleware: request IDs, auth info, deadlines, or
    anything else a constructor wants to hand downstream.

    Example:
        >>> ctx = Context()
        >>> ctx["request_id"] = "abc123"
        >>> ctx.get("request_id")
        'abc123'
        >>> child = ctx.with_values(user="ada")
        >>> "user" in ctx, "user" in child
        (False, True)
    """

    data: dict[str, object] = field(default_factory=dict)

    def __getitem__(self, key: str) -> object:
        return self.data[key]

    def __setitem__(self, key: str, value: object) -> None:
        self.data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.data

    def get(self, key: str, default: object = None) -> object:
        return self.data.get(key, default)

    def with_values(self, **values: object) -> Context:
        """Derive a new context holding this one's values plus ``values``."""
        return Context({**self.data, **values})


def background() -> Context:
    """Return a fresh, empty context for the top of a request."""
    return Context()


@runtime_checkable
class ContextHandler(Protocol):
    """Server-side handler that also receives a Context."""

    async def __call__(self, ctx: Context, request: Request, response: Response) -> None: ...


class DefaultContextHandler:
    """Discards the context and forwards to ``default_handler``."""

    __slots__ = ()

    async def __call__(self, ctx: Context, request: Request, response: Response) -> None:
        await default_handler(request, response)

    def __repr__(self) -> str:
        return "default_context_handler"


default_context_handler = DefaultContextHandler()
