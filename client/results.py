"""
Outcome of a client action.

``Ok`` means the server confirmed the change. ``Degraded`` means the server was
unreachable and the change was only applied to the local mirror. ``Failed``
means nothing changed.
"""
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T

    is_ok = True
    is_degraded = False
    is_failed = False


@dataclass(frozen=True)
class Degraded(Generic[T]):
    data: T
    error: Exception

    is_ok = False
    is_degraded = True
    is_failed = False


@dataclass(frozen=True)
class Failed:
    error: Exception
    data: Optional[Any] = None

    is_ok = False
    is_degraded = False
    is_failed = True


Result = Union[Ok[T], Degraded[T], Failed]
