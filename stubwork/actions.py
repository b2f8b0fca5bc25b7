"""Actions a stub performs once it wins a call."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence

from stubwork.logging import safe_repr


class Action(ABC):
    """Produces the value handed back for a resolved call."""

    @abstractmethod
    def perform(self, args: Sequence[Any]) -> Any:
        """Return the stubbed value for ``args``."""

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable form for diagnostics."""


@dataclass(frozen=True)
class Return(Action):
    """Hands back a fixed value, ignoring the arguments."""

    value: Any

    def perform(self, args: Sequence[Any]) -> Any:  # noqa: ARG002
        return self.value

    def describe(self) -> str:
        return f"and_return({safe_repr(self.value)})"


@dataclass(frozen=True)
class Compute(Action):
    """Invokes ``closure`` with the full argument list."""

    closure: Callable[[List[Any]], Any]

    def perform(self, args: Sequence[Any]) -> Any:
        return self.closure(list(args))

    def describe(self) -> str:
        name = getattr(self.closure, "__name__", type(self.closure).__name__)
        return f"and_do({name})"


__all__ = ["Action", "Compute", "Return"]
