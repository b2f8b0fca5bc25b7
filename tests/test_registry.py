from __future__ import annotations

import pytest

from stubwork.exceptions import StubConfigurationError
from stubwork.registry import StubCatalog, StubRegistry
from stubwork.stub import Stub


def test_registry_keeps_insertion_order_and_duplicates() -> None:
    registry = StubRegistry("fn")
    first = registry.register(Stub("fn").and_return(1))
    second = registry.register(Stub("fn").and_return(1))
    assert registry.candidates() == (first, second)
    assert len(registry) == 2
    assert list(registry) == [first, second]


def test_registry_rejects_stub_for_other_function() -> None:
    registry = StubRegistry("fn")
    with pytest.raises(StubConfigurationError):
        registry.register(Stub("other"))


def test_catalog_groups_stubs_by_identifier() -> None:
    catalog = StubCatalog()
    greet = catalog.create_stub("greet")
    leave = catalog.create_stub("leave")
    assert catalog.candidates("greet") == (greet,)
    assert catalog.candidates("leave") == (leave,)
    assert catalog.candidates("missing") == ()
    assert "greet" in catalog
    assert "missing" not in catalog
    assert sorted(catalog.identifiers()) == ["greet", "leave"]


def test_catalog_reset_drops_everything() -> None:
    catalog = StubCatalog()
    catalog.create_stub("greet").and_return("hi")
    catalog.reset()
    assert catalog.candidates("greet") == ()
    assert catalog.identifiers() == []


def test_registry_for_does_not_list_empty_registries() -> None:
    catalog = StubCatalog()
    catalog.registry_for("greet")
    assert catalog.identifiers() == []
    assert "greet" not in catalog
