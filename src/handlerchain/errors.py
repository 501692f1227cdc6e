"""Structured errors for chain misuse.

Composition itself never fails at request time: errors raised by handlers,
constructors and endwares propagate unchanged. The types here cover misuse
detected at the API boundary, where a static type checker would normally
have caught a wrong argument.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(StrEnum):
    """Machine-readable codes for chain misuse."""
    NOT_CALLABLE = "NOT_CALLABLE"
    INVALID_HANDLER = "INVALID_HANDLER"
    INVALID_CHAIN = "INVALID_CHAIN"


class ChainError(BaseModel):
    """Structured description of a misuse.

    Attributes:
        operation: Chain operation that detected the problem (e.g. ``Chain.append``)
        message: Human-readable error message
        code: Machine-readable error code
        position: Index of the offending argument, when there is one
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    operation: Annotated[str, Field(min_length=1)]
    message: Annotated[str, Field(min_length=1)]
    code: ErrorCode = ErrorCode.NOT_CALLABLE
    position: int | None = None

    def render(self) -> str:
        where = f" (argument {self.position})" if self.position is not None else ""
        return f"{self.operation}{where}: {self.message} [{self.code}]"

    __str__ = render


class ChainException(TypeError):
    """Exception wrapping a ChainError for raising."""

    __slots__ = ("error",)

    def __init__(self, error: ChainError) -> None:
        self.error = error
        super().__init__(error.render())

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @classmethod
    def create(
        cls,
        operation: str,
        message: str,
        code: ErrorCode = ErrorCode.NOT_CALLABLE,
        *,
        position: int | None = None,
    ) -> Self:
        return cls(ChainError(operation=operation, message=message, code=code, position=position))


def ensure_callables(operation: str, values: tuple[object, ...], kind: str) -> None:
    """Raise NOT_CALLABLE for the first non-callable in ``values``."""
    for i, value in enumerate(values):
        if not callable(value):
            raise ChainException.create(
                operation,
                f"{kind} must be callable, got {type(value).__name__}",
                position=i,
            )


def ensure_handler(operation: str, value: object, produced_by: object) -> None:
    """Raise INVALID_HANDLER when a wrap step produced something uncallable."""
    if not callable(value):
        raise ChainException.create(
            operation,
            f"{produced_by!r} returned {type(value).__name__}, expected a handler",
            ErrorCode.INVALID_HANDLER,
        )
