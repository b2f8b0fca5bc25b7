"""Resolution engine: picks the stub that answers a call."""

from __future__ import annotations

import logging

from typing import Any, Optional, Sequence, Tuple

from stubwork.configuration import StubworkSettings
from stubwork.constants import ORDER_FIRST_REGISTERED
from stubwork.exceptions import StubReturnTypeError, UnstubbedCallError
from stubwork.logging import (
    format_args,
    setup_file_logger,
    teardown_file_logger,
)
from stubwork.recorder import CallRecorder
from stubwork.registry import StubCatalog
from stubwork.stub import Stub
from stubwork.types import NO_FALLBACK, Fallback, FallbackSpec, Resolution

LOGGER = logging.getLogger(__name__)


class ResolutionEngine:
    """Resolves calls against a catalog of stubs and records them.

    Stubs declared with arguments are consulted before catch-all stubs,
    most recent first within each group, so a specific stub answers its
    arguments whether it was declared before or after a general one.
    """

    def __init__(
        self,
        catalog: Optional[StubCatalog] = None,
        recorder: Optional[CallRecorder] = None,
        *,
        settings: Optional[StubworkSettings] = None,
    ) -> None:
        self.catalog = catalog or StubCatalog()
        self.recorder = recorder or CallRecorder()
        self.settings = settings or StubworkSettings()
        self._log_handler: Optional[logging.Handler] = None
        if self.settings.log_file is not None:
            self._log_handler = setup_file_logger(self.settings.log_file)

    def stub(self, identifier: str) -> Stub:
        """Declare a new stub for ``identifier``."""

        return self.catalog.create_stub(identifier)

    def find_stub(
        self, identifier: str, args: Sequence[Any]
    ) -> Optional[Stub]:
        """Return the stub that would answer the call, without running it."""

        return self._select(self.catalog.candidates(identifier), tuple(args))

    def resolve(
        self,
        identifier: str,
        args: Sequence[Any],
        *,
        fallback: FallbackSpec = NO_FALLBACK,
        expected_type: Any = None,
    ) -> Any:
        """Return the stubbed value for a call.

        Raises ``UnstubbedCallError`` when nothing matches and no
        ``Fallback`` was supplied.
        """

        return self.try_resolve(
            identifier,
            args,
            fallback=fallback,
            expected_type=expected_type,
        ).unwrap()

    def try_resolve(
        self,
        identifier: str,
        args: Sequence[Any],
        *,
        fallback: FallbackSpec = NO_FALLBACK,
        expected_type: Any = None,
    ) -> Resolution:
        """Resolve a call, returning an unmatched call instead of raising."""

        call_args = tuple(args)
        if self.settings.record_calls:
            self.recorder.record(identifier, call_args)
        candidates = self.catalog.candidates(identifier)
        winner = self._select(candidates, call_args)
        details = {
            "candidates": len(candidates),
            "order": self.settings.resolution_order,
        }

        if winner is not None:
            value = winner.execute(call_args)
            if self.settings.log_resolutions:
                self._log(
                    identifier, call_args, f"matched {winner.describe()}"
                )
            self._check_type(identifier, value, expected_type)
            return Resolution(
                ok=True, value=value, stub=winner, details=details
            )

        if isinstance(fallback, Fallback):
            if candidates:
                LOGGER.warning(
                    "No stub for %s matched %s; using fallback",
                    identifier,
                    self._format(call_args),
                )
            else:
                self._log(identifier, call_args, "used fallback")
            self._check_type(identifier, fallback.value, expected_type)
            return Resolution(
                ok=True,
                value=fallback.value,
                used_fallback=True,
                details=details,
            )

        self._log(identifier, call_args, "unstubbed")
        error = UnstubbedCallError(
            identifier,
            call_args,
            candidates,
            include_candidates=self.settings.report_candidates,
            max_repr_length=self.settings.max_repr_length,
        )
        return Resolution(ok=False, error=error, details=details)

    def reset(self) -> None:
        """Forget every stub and recorded call."""

        self.catalog.reset()
        self.recorder.reset()

    def close(self) -> None:
        """Detach and close the log file handler this engine attached."""

        if self._log_handler is not None:
            teardown_file_logger(self._log_handler)
            self._log_handler = None

    def _select(
        self, candidates: Tuple[Stub, ...], args: Tuple[Any, ...]
    ) -> Optional[Stub]:
        if self.settings.resolution_order == ORDER_FIRST_REGISTERED:
            ordered = candidates
        else:
            ordered = tuple(reversed(candidates))
        # Stubs with argument matchers are tried before catch-all stubs.
        for stub in ordered:
            if stub.matchers and stub.matches_call(args):
                return stub
        for stub in ordered:
            if not stub.matchers:
                return stub
        return None

    def _check_type(
        self, identifier: str, value: Any, expected_type: Any
    ) -> None:
        if expected_type is None:
            return
        if not isinstance(value, expected_type):
            raise StubReturnTypeError(identifier, expected_type, value)

    def _format(self, args: Tuple[Any, ...]) -> str:
        return format_args(args, self.settings.max_repr_length)

    def _log(
        self, identifier: str, args: Tuple[Any, ...], outcome: str
    ) -> None:
        if self.settings.log_resolutions:
            LOGGER.debug(
                "resolve %s%s: %s", identifier, self._format(args), outcome
            )


__all__ = ["ResolutionEngine"]
