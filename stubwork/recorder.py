"""Call recording for spy-style assertions."""

from __future__ import annotations

import itertools
import logging

from typing import Any, Dict, List, Optional, Sequence

from stubwork.matchers import as_matcher, matches_all
from stubwork.types import CallRecord

LOGGER = logging.getLogger(__name__)


class CallRecorder:
    """Keeps every call routed through the engine, in call order."""

    def __init__(self) -> None:
        self._records: List[CallRecord] = []
        self._by_identifier: Dict[str, List[CallRecord]] = {}
        self._sequence = itertools.count(1)

    def record(self, identifier: str, args: Sequence[Any]) -> CallRecord:
        entry = CallRecord(
            identifier=identifier,
            args=tuple(args),
            sequence=next(self._sequence),
        )
        self._records.append(entry)
        self._by_identifier.setdefault(identifier, []).append(entry)
        LOGGER.debug("Recorded call #%d to %s", entry.sequence, identifier)
        return entry

    def calls(self, identifier: Optional[str] = None) -> List[CallRecord]:
        """Return recorded calls, optionally only those for ``identifier``."""

        if identifier is None:
            return list(self._records)
        return list(self._by_identifier.get(identifier, ()))

    def call_count(self, identifier: str, *matchers: Any) -> int:
        """Count calls to ``identifier`` whose arguments satisfy ``matchers``.

        With no matchers every call counts.
        """

        expected = tuple(as_matcher(matcher) for matcher in matchers)
        return sum(
            1
            for entry in self._by_identifier.get(identifier, ())
            if matches_all(expected, entry.args)
        )

    def has_been_called(
        self,
        identifier: str,
        *matchers: Any,
        times: Optional[int] = None,
        at_least: Optional[int] = None,
        at_most: Optional[int] = None,
    ) -> bool:
        """Spy assertion helper.

        Without a count specifier this means "called at least once".
        """

        if times is not None and (
            at_least is not None or at_most is not None
        ):
            raise ValueError("times cannot be combined with at_least/at_most")
        count = self.call_count(identifier, *matchers)
        if times is not None:
            return count == times
        if at_least is None and at_most is None:
            return count > 0
        if at_least is not None and count < at_least:
            return False
        if at_most is not None and count > at_most:
            return False
        return True

    def last_call(self, identifier: str) -> Optional[CallRecord]:
        entries = self._by_identifier.get(identifier)
        return entries[-1] if entries else None

    def reset(self) -> None:
        self._records.clear()
        self._by_identifier.clear()
        self._sequence = itertools.count(1)

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["CallRecorder"]
