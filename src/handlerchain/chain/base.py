"""Generic composition core shared by every chain flavour.

A chain is an immutable, ordered tuple of constructors. Resolving it with
``then(h)`` wraps ``h`` from the innermost constructor outwards, so
``Chain(m1, m2, m3).then(h)`` behaves as ``m1(m2(m3(h)))``: a request reaches
m1 first, then m2, then m3, then h.

Subclasses only decide what an absent terminal resolves to (``_default``),
how the terminal is prepared before wrapping (``_terminal``) and how a new
value of their own kind is derived (``_derive``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, ClassVar, Generic, TypeVar

from ..errors import ChainException, ErrorCode, ensure_callables, ensure_handler
from ..http import HandlerFunc

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any, Self

logger = logging.getLogger("handlerchain.chain")

H = TypeVar("H")

# A constructor for a piece of middleware: wraps a handler, returns a handler.
Constructor = Callable[[H], H]


class BaseChain(Generic[H]):
    """Immutable list of constructors for one handler capability.

    Every operation that adds elements returns a new chain; the receiver keeps
    the same constructors in the same order for its whole life. Constructors
    are only called on ``then()``, once per resolution.
    """

    __slots__ = ("_constructors",)

    _kind: ClassVar[str] = "handler"

    def __init__(self, *constructors: Constructor[H]) -> None:
        ensure_callables(f"{type(self).__name__}()", constructors, "constructor")
        self._constructors: tuple[Constructor[H], ...] = tuple(constructors)

    @property
    def constructors(self) -> tuple[Constructor[H], ...]:
        return self._constructors

    def __len__(self) -> int:
        return len(self._constructors)

    def __iter__(self) -> Iterator[Constructor[H]]:
        return iter(self._constructors)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(constructors={len(self._constructors)})"

    # Hooks

    def _default(self) -> H:
        raise NotImplementedError

    def _terminal(self, handler: H) -> H:
        return handler

    def _derive(self, constructors: tuple[Constructor[H], ...]) -> Self:
        return type(self)(*constructors)

    def _check_same_kind(self, operation: str, other: object) -> None:
        if not isinstance(other, BaseChain) or other._kind != self._kind:
            raise ChainException.create(
                operation,
                f"cannot combine {type(self).__name__} with {type(other).__name__}",
                ErrorCode.INVALID_CHAIN,
            )

    # Composition

    def then(self, handler: H | None = None) -> H:
        """Chain the constructors around ``handler`` and return the result.

        A chain can be reused by calling ``then()`` several times; each call
        invokes every constructor again, so several instances of the same
        middleware are created. ``None`` resolves to the flavour's default.
        """
        operation = f"{type(self).__name__}.then"
        if handler is None:
            handler = self._default()
            logger.debug(f"{operation}: no terminal given, using {handler!r}")
        else:
            ensure_callables(operation, (handler,), "handler")

        handler = self._terminal(handler)
        for constructor in reversed(self._constructors):
            handler = constructor(handler)
            ensure_handler(operation, handler, constructor)

        logger.debug(f"{operation}: resolved {self!r}")
        return handler

    def then_func(self, fn: Callable[..., Any] | None = None) -> H:
        """Like ``then``, but takes a plain function (sync or async).

        ``c.then_func(fn)`` is equivalent to ``c.then(HandlerFunc(fn))``, and
        ``c.then_func(None)`` to ``c.then(None)``.
        """
        if fn is None:
            return self.then(None)
        ensure_callables(f"{type(self).__name__}.then_func", (fn,), "handler")
        return self.then(HandlerFunc(fn))  # type: ignore[arg-type]

    def append(self, *constructors: Constructor[H]) -> Self:
        """Return a new chain with ``constructors`` last in the request flow.

            std = Chain(m1, m2)
            ext = std.append(m3, m4)
            # requests in std go m1 -> m2
            # requests in ext go m1 -> m2 -> m3 -> m4
        """
        ensure_callables(f"{type(self).__name__}.append", constructors, "constructor")
        return self._derive(self._constructors + tuple(constructors))

    def extend(self, other: Self) -> Self:
        """Return a new chain with ``other``'s constructors after this one's."""
        self._check_same_kind(f"{type(self).__name__}.extend", other)
        return self.append(*other.constructors)
