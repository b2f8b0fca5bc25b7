"""Positional argument matchers used by stubs and spies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type, Union

from stubwork.logging import safe_repr


class ArgumentMatcher(ABC):
    """Answers whether one concrete argument satisfies an expectation."""

    @abstractmethod
    def matches(self, concrete: Any) -> bool:
        """Return ``True`` when ``concrete`` satisfies this matcher."""

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable form for diagnostics."""

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class Exact(ArgumentMatcher):
    """Matches arguments equal to ``value``."""

    value: Any

    def matches(self, concrete: Any) -> bool:
        # None only equals None, whatever a permissive __eq__ claims.
        if self.value is None or concrete is None:
            return self.value is None and concrete is None
        try:
            return bool(self.value == concrete)
        except ValueError:
            # Ambiguous element-wise equality, e.g. comparing arrays.
            return False

    def describe(self) -> str:
        return safe_repr(self.value)


@dataclass(frozen=True)
class Predicate(ArgumentMatcher):
    """Matches arguments for which ``fn`` returns a truthy value."""

    fn: Callable[[Any], Any]
    label: Optional[str] = None

    def matches(self, concrete: Any) -> bool:
        return bool(self.fn(concrete))

    def describe(self) -> str:
        label = self.label or getattr(self.fn, "__name__", "predicate")
        return f"<{label}>"


@dataclass(frozen=True)
class Anything(ArgumentMatcher):
    """Matches every argument."""

    def matches(self, concrete: Any) -> bool:  # noqa: ARG002
        return True

    def describe(self) -> str:
        return "<any>"


TypeSpec = Union[Type[Any], Tuple[Type[Any], ...]]


def anything() -> Anything:
    return Anything()


def is_none() -> Predicate:
    return Predicate(lambda value: value is None, label="is_none")


def not_none() -> Predicate:
    return Predicate(lambda value: value is not None, label="not_none")


def instance_of(expected: TypeSpec) -> Predicate:
    """Match arguments that are instances of ``expected``."""

    if isinstance(expected, tuple):
        name = " | ".join(item.__name__ for item in expected)
    else:
        name = expected.__name__
    return Predicate(
        lambda value: isinstance(value, expected),
        label=f"instance_of {name}",
    )


def in_range(low: Any, high: Any) -> Predicate:
    """Match arguments with ``low <= value <= high``."""

    if high < low:
        raise ValueError(f"Empty range: {low!r}..{high!r}")

    def _within(value: Any) -> bool:
        try:
            return low <= value <= high
        except TypeError:
            return False

    return Predicate(_within, label=f"in_range {low!r}..{high!r}")


def matching(
    fn: Callable[[Any], Any], label: Optional[str] = None
) -> Predicate:
    return Predicate(fn, label=label)


def as_matcher(value: Any) -> ArgumentMatcher:
    """Return ``value`` if it is already a matcher, else wrap it in Exact."""

    if isinstance(value, ArgumentMatcher):
        return value
    return Exact(value)


def matches_all(
    matchers: Tuple[ArgumentMatcher, ...], args: Tuple[Any, ...]
) -> bool:
    """Positional match shared by stubs and spy queries.

    An empty matcher tuple accepts any argument list.
    """

    if not matchers:
        return True
    if len(args) != len(matchers):
        return False
    return all(
        matcher.matches(arg) for matcher, arg in zip(matchers, args)
    )


__all__ = [
    "ArgumentMatcher",
    "Anything",
    "Exact",
    "Predicate",
    "anything",
    "as_matcher",
    "in_range",
    "instance_of",
    "is_none",
    "matches_all",
    "matching",
    "not_none",
]
