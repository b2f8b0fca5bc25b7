"""Core dataclasses shared by the engine, recorder and instrumentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Optional, Tuple, TypeVar, Union

if TYPE_CHECKING:  # pragma: no cover
    from stubwork.exceptions import UnstubbedCallError
    from stubwork.stub import Stub

T = TypeVar("T")


class NoFallback:
    """Marker meaning an unmatched call must fail."""

    _instance: Optional["NoFallback"] = None

    def __new__(cls) -> "NoFallback":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_FALLBACK"

    def __bool__(self) -> bool:
        return False


NO_FALLBACK = NoFallback()


@dataclass(frozen=True)
class Fallback(Generic[T]):
    """Default value used when no stub matches a call."""

    value: T


FallbackSpec = Union[NoFallback, Fallback[Any]]


@dataclass(frozen=True)
class CallRecord:
    """One call observed by the recorder."""

    identifier: str
    args: Tuple[Any, ...]
    sequence: int


@dataclass
class Resolution:
    """Outcome of a resolve attempt that does not raise on a miss."""

    ok: bool
    value: Any = None
    error: Optional["UnstubbedCallError"] = None
    stub: Optional["Stub"] = None
    used_fallback: bool = False
    details: dict = field(default_factory=dict)

    def unwrap(self) -> Any:
        """Return the value, or raise the recorded unstubbed-call error."""

        if not self.ok and self.error is not None:
            raise self.error
        return self.value


__all__ = [
    "CallRecord",
    "Fallback",
    "FallbackSpec",
    "NO_FALLBACK",
    "NoFallback",
    "Resolution",
]
