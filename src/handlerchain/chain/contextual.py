"""Chain of context-aware handler constructors."""

from __future__ import annotations

from typing import Callable, ClassVar

from ..context import ContextHandler, default_context_handler
from .base import BaseChain

ContextConstructor = Callable[[ContextHandler], ContextHandler]


class ContextChain(BaseChain[ContextHandler]):
    """Chain whose handlers receive an explicit Context as first argument.

    Behaves exactly like ``Chain`` without endwares. ``then(None)`` resolves to
    ``default_context_handler``, which ignores the context and answers with
    ``default_handler``.
    """

    __slots__ = ()

    _kind: ClassVar[str] = "context"

    def _default(self) -> ContextHandler:
        return default_context_handler
