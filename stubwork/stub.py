"""Stub descriptors: argument expectations plus one action."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Tuple

from stubwork.actions import Action, Compute, Return
from stubwork.exceptions import IncompleteStubError
from stubwork.matchers import ArgumentMatcher, as_matcher, matches_all


class Stub:
    """One registered stub for a function identifier.

    With no argument matchers the stub accepts any call to its function.
    Only the last ``and_return``/``and_do`` takes effect; declare a new
    stub for a different argument specification.

    Example::

        catalog.create_stub("greet").with_args("Alice").and_return("Hi")
    """

    def __init__(self, function_name: str) -> None:
        self.function_name = function_name
        self._matchers: List[ArgumentMatcher] = []
        self._action: Optional[Action] = None

    @property
    def matchers(self) -> Tuple[ArgumentMatcher, ...]:
        return tuple(self._matchers)

    @property
    def action(self) -> Optional[Action]:
        return self._action

    @property
    def is_complete(self) -> bool:
        return self._action is not None

    def with_args(self, *matchers: Any) -> "Stub":
        """Append positional argument expectations.

        Plain values are compared for equality; pass an
        ``ArgumentMatcher`` for anything looser.
        """

        self._matchers.extend(as_matcher(matcher) for matcher in matchers)
        return self

    def set_action(self, action: Action) -> "Stub":
        self._action = action
        return self

    def and_return(self, value: Any) -> "Stub":
        return self.set_action(Return(value))

    def and_do(self, closure: Callable[[List[Any]], Any]) -> "Stub":
        return self.set_action(Compute(closure))

    def matches_call(self, args: Sequence[Any]) -> bool:
        return matches_all(self.matchers, tuple(args))

    def execute(self, args: Sequence[Any]) -> Any:
        """Run the configured action for a call this stub has won."""

        if self._action is None:
            raise IncompleteStubError(self.function_name)
        return self._action.perform(args)

    def describe(self) -> str:
        arguments = ", ".join(f"<{m.describe()}>" for m in self._matchers)
        action = self._action.describe() if self._action else "nil"
        return (
            f"Stub(function: <{self.function_name}>, args: <{arguments}>, "
            f"returnValue: <{action}>)"
        )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return self.describe()


def describe(stub: Stub) -> str:
    """Return the diagnostic summary of ``stub``."""

    return stub.describe()


__all__ = ["Stub", "describe"]
