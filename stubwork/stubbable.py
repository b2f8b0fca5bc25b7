"""Seams that let test doubles and production code consult the engine."""

from __future__ import annotations

import functools
import inspect

from typing import Any, Callable, List, Optional, TypeVar

from stubwork.configuration import StubworkSettings
from stubwork.engine import ResolutionEngine
from stubwork.recorder import CallRecorder
from stubwork.stub import Stub
from stubwork.types import NO_FALLBACK, Fallback, FallbackSpec

F = TypeVar("F", bound=Callable[..., Any])


class Stubbable:
    """Mixin for hand-written test doubles.

    Every instance owns its own engine, so two doubles never share stubs
    or recorded calls.

    Example::

        class FakeGreeter(Greeter, Stubbable):
            def greet(self, name):
                return self.stubbed_value("greet", name)

        fake = FakeGreeter()
        fake.stub("greet").with_args("Alice").and_return("Hi Alice")
    """

    stubwork_settings: Optional[StubworkSettings] = None

    @property
    def stubwork_engine(self) -> ResolutionEngine:
        engine = self.__dict__.get("_stubwork_engine")
        if engine is None:
            engine = ResolutionEngine(settings=self.stubwork_settings)
            self.__dict__["_stubwork_engine"] = engine
        return engine

    @property
    def recorder(self) -> CallRecorder:
        return self.stubwork_engine.recorder

    def stub(self, function_name: str) -> Stub:
        return self.stubwork_engine.stub(function_name)

    def stubbed_value(
        self,
        function_name: str,
        *args: Any,
        fallback: FallbackSpec = NO_FALLBACK,
        expected_type: Any = None,
    ) -> Any:
        return self.stubwork_engine.resolve(
            function_name,
            args,
            fallback=fallback,
            expected_type=expected_type,
        )

    def stubbed_value_or(
        self, function_name: str, default: Any, *args: Any
    ) -> Any:
        """Resolve a call, handing back ``default`` when nothing matches."""

        return self.stubbed_value(
            function_name, *args, fallback=Fallback(default)
        )

    def has_been_called(
        self, function_name: str, *matchers: Any, **counts: Optional[int]
    ) -> bool:
        return self.recorder.has_been_called(
            function_name, *matchers, **counts
        )

    def reset_stubs(self) -> None:
        self.stubwork_engine.reset()


def instrument(
    engine: ResolutionEngine,
    identifier: Optional[str] = None,
    *,
    passthrough: bool = True,
    method: bool = False,
) -> Callable[[F], F]:
    """Route calls to the decorated function through ``engine``.

    Keyword arguments are bound to their positions and defaults are filled
    in, so stubs always see the full positional argument list. With
    ``method=True`` the leading ``self``/``cls`` argument is left out.
    When no stub matches, the real function runs if ``passthrough`` is
    set; otherwise ``UnstubbedCallError`` is raised.
    """

    def decorator(func: F) -> F:
        name = identifier or func.__qualname__
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            call_args = _positional_args(signature, args, kwargs)
            if method:
                call_args = call_args[1:]
            resolution = engine.try_resolve(name, call_args)
            if resolution.ok:
                return resolution.value
            if passthrough:
                return func(*args, **kwargs)
            return resolution.unwrap()

        wrapper.stubwork_identifier = name  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator


def _positional_args(
    signature: inspect.Signature, args: tuple, kwargs: dict
) -> List[Any]:
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    values: List[Any] = []
    for name, param in signature.parameters.items():
        if name not in bound.arguments:
            continue
        value = bound.arguments[name]
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            values.extend(value)
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            if value:
                values.append(dict(value))
        else:
            values.append(value)
    return values


__all__ = ["Stubbable", "instrument"]
