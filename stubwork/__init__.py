"""stubwork package entry point."""

from .actions import Action, Compute, Return
from .configuration import (
    StubworkSettings,
    build_settings,
    load_settings,
    settings_from_env,
)
from .engine import ResolutionEngine
from .exceptions import (
    IncompleteStubError,
    StubConfigurationError,
    StubReturnTypeError,
    StubworkConfigError,
    StubworkError,
    UnstubbedCallError,
)
from .matchers import (
    Anything,
    ArgumentMatcher,
    Exact,
    Predicate,
    anything,
    in_range,
    instance_of,
    is_none,
    matching,
    not_none,
)
from .recorder import CallRecorder
from .registry import StubCatalog, StubRegistry
from .stub import Stub, describe
from .stubbable import Stubbable, instrument
from .types import NO_FALLBACK, CallRecord, Fallback, NoFallback, Resolution

__all__ = [
    "Action",
    "Anything",
    "ArgumentMatcher",
    "CallRecord",
    "CallRecorder",
    "Compute",
    "Exact",
    "Fallback",
    "IncompleteStubError",
    "NO_FALLBACK",
    "NoFallback",
    "Predicate",
    "Resolution",
    "ResolutionEngine",
    "Return",
    "Stub",
    "StubCatalog",
    "StubConfigurationError",
    "StubRegistry",
    "StubReturnTypeError",
    "Stubbable",
    "StubworkConfigError",
    "StubworkError",
    "StubworkSettings",
    "UnstubbedCallError",
    "anything",
    "build_settings",
    "describe",
    "in_range",
    "instance_of",
    "instrument",
    "is_none",
    "load_settings",
    "matching",
    "not_none",
    "settings_from_env",
]
