"""Custom exceptions for the stub resolution engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence, Tuple

from stubwork.constants import DEFAULT_MAX_REPR_LENGTH
from stubwork.logging import format_args

if TYPE_CHECKING:  # pragma: no cover
    from stubwork.stub import Stub


class StubworkError(RuntimeError):
    """Base exception for recoverable stubbing failures."""


class UnstubbedCallError(StubworkError):
    """Raised when no stub satisfied a call and no fallback was given."""

    def __init__(
        self,
        identifier: str,
        args: Sequence[Any],
        candidates: Sequence["Stub"] = (),
        *,
        include_candidates: bool = True,
        max_repr_length: int = DEFAULT_MAX_REPR_LENGTH,
    ) -> None:
        self.identifier = identifier
        self.arguments: Tuple[Any, ...] = tuple(args)
        self.candidates: Tuple["Stub", ...] = tuple(candidates)
        self.include_candidates = include_candidates
        self.max_repr_length = max_repr_length
        message = (
            f"No stub for '{identifier}' matched arguments "
            f"{format_args(self.arguments, max_repr_length)}"
        )
        if include_candidates and self.candidates:
            listed = "; ".join(stub.describe() for stub in self.candidates)
            message = f"{message} (candidates: {listed})"
        elif not self.candidates:
            message = f"{message} (nothing stubbed)"
        super().__init__(message)

    def report(self) -> str:
        """Render a multi-line report describing the failed call."""

        from stubwork.reporting import render_unstubbed_call

        return render_unstubbed_call(
            self, max_repr_length=self.max_repr_length
        )


class StubConfigurationError(RuntimeError):
    """Base exception for mistakes made while configuring stubs.

    Not a ``StubworkError``: handlers for unstubbed calls must never
    swallow a broken test setup.
    """


class IncompleteStubError(StubConfigurationError):
    """Raised when a stub wins a call but has no action attached."""

    def __init__(self, function_name: str) -> None:
        self.function_name = function_name
        super().__init__(
            f"Stub for '{function_name}' has no action; "
            "finish it with and_return() or and_do()"
        )


class StubReturnTypeError(StubConfigurationError, TypeError):
    """Raised when a resolved value does not have the expected type."""

    def __init__(
        self, identifier: str, expected: Any, value: Any
    ) -> None:
        self.identifier = identifier
        self.expected = expected
        self.value = value
        super().__init__(
            f"Stub for '{identifier}' produced {type(value).__name__} "
            f"but the caller expected {_type_label(expected)}"
        )


class StubworkConfigError(ValueError):
    """Raised when stubwork settings are invalid."""


def _type_label(expected: Any) -> str:
    if isinstance(expected, tuple):
        return " | ".join(_type_label(item) for item in expected)
    return getattr(expected, "__name__", repr(expected))
