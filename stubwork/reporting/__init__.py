"""Diagnostic report rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from stubwork.reporting.manager import ReportManager

if TYPE_CHECKING:  # pragma: no cover
    from stubwork.exceptions import UnstubbedCallError

_DEFAULT_MANAGER: Optional[ReportManager] = None


def default_manager() -> ReportManager:
    global _DEFAULT_MANAGER
    if _DEFAULT_MANAGER is None:
        _DEFAULT_MANAGER = ReportManager()
    return _DEFAULT_MANAGER


def render_unstubbed_call(
    error: "UnstubbedCallError",
    *,
    manager: Optional[ReportManager] = None,
    max_repr_length: Optional[int] = None,
) -> str:
    """Render the multi-line report for an unstubbed call.

    Argument formatting follows the error's own ``max_repr_length`` unless
    one is given here.
    """

    manager = manager or default_manager()
    return manager.unstubbed_call(error, max_repr_length=max_repr_length)


__all__ = ["ReportManager", "default_manager", "render_unstubbed_call"]
