"""Per-function stub registries and the identifier mapping that owns them."""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from stubwork.exceptions import StubConfigurationError
from stubwork.stub import Stub


class StubRegistry:
    """Insertion-ordered stubs declared for one function identifier.

    Append only: later declarations are kept alongside earlier ones, even
    when their matchers are identical.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        self._stubs: List[Stub] = []

    def register(self, stub: Stub) -> Stub:
        if stub.function_name != self.identifier:
            raise StubConfigurationError(
                f"Stub for '{stub.function_name}' cannot be registered "
                f"under '{self.identifier}'"
            )
        self._stubs.append(stub)
        return stub

    def candidates(self) -> Tuple[Stub, ...]:
        """Return the stubs oldest first."""

        return tuple(self._stubs)

    def __len__(self) -> int:
        return len(self._stubs)

    def __iter__(self) -> Iterator[Stub]:
        return iter(tuple(self._stubs))

    def __bool__(self) -> bool:
        return bool(self._stubs)


class StubCatalog:
    """Maps function identifiers to their registries."""

    def __init__(self) -> None:
        self._registries: Dict[str, StubRegistry] = {}

    def create_stub(self, identifier: str) -> Stub:
        """Declare a new stub for ``identifier`` and register it."""

        stub = Stub(identifier)
        self.registry_for(identifier).register(stub)
        return stub

    def registry_for(self, identifier: str) -> StubRegistry:
        registry = self._registries.get(identifier)
        if registry is None:
            registry = StubRegistry(identifier)
            self._registries[identifier] = registry
        return registry

    def candidates(self, identifier: str) -> Tuple[Stub, ...]:
        registry = self._registries.get(identifier)
        return registry.candidates() if registry else ()

    def identifiers(self) -> List[str]:
        return [
            name for name, registry in self._registries.items() if registry
        ]

    def reset(self) -> None:
        """Drop every registered stub."""

        self._registries.clear()

    def __contains__(self, identifier: object) -> bool:
        return bool(self._registries.get(identifier))  # type: ignore[arg-type]


__all__ = ["StubCatalog", "StubRegistry"]
