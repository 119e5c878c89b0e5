from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NO_FILES = "NO_FILES"
    UNKNOWN_COMPRESSION = "UNKNOWN_COMPRESSION"
    IO = "IO"
    DECODE = "DECODE"
    PARAM = "PARAM"
    CANCELLED = "CANCELLED"
    INTERNAL = "INTERNAL"


class HelperError(Exception):
    """A classified failure that the dispatcher turns into a FAILURE response."""

    def __init__(self, kind: ErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail

    def __repr__(self) -> str:
        return f"HelperError({self.kind.value}, {self.detail!r})"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: HelperError

    @classmethod
    def of(cls, kind: ErrorKind, detail: str) -> Err:
        return cls(HelperError(kind, detail))


Result = Ok[T] | Err
