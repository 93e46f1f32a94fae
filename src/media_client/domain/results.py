"""Uniform success/error result for client operations."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(StrEnum):
    """Category of a failed operation."""

    TRANSPORT = "transport"
    STATUS = "status"
    INVALID_PAYLOAD = "invalid_payload"


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Either a success payload or an error message, never both.

    Void operations succeed with ``data=None``; success is decided by the
    absence of ``error``.
    """

    data: T | None = None
    error: str | None = None
    kind: ErrorKind | None = None

    def __post_init__(self) -> None:
        if self.error is None:
            if self.kind is not None:
                raise ValueError("Successful result cannot carry an error kind")
            return
        if not self.error:
            raise ValueError("Error message must not be empty")
        if self.data is not None:
            raise ValueError("Result cannot hold both data and error")

    @classmethod
    def success(cls, data: T | None = None) -> "OperationResult[T]":
        """Build a successful result."""
        return cls(data=data)

    @classmethod
    def failure(
        cls, message: str, kind: ErrorKind = ErrorKind.TRANSPORT
    ) -> "OperationResult[T]":
        """Build a failed result."""
        return cls(error=message, kind=kind)

    @property
    def ok(self) -> bool:
        return self.error is None
