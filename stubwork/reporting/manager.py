"""Jinja2-backed rendering of diagnostic reports."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateNotFound,
)

from stubwork.constants import UNSTUBBED_CALL_TEMPLATE
from stubwork.logging import format_args

if TYPE_CHECKING:  # pragma: no cover
    from stubwork.exceptions import UnstubbedCallError

BUILTIN_TEMPLATES = Path(__file__).parent / "templates"


class ReportManager:
    """Renders failure reports, preferring templates in ``overrides_dir``."""

    def __init__(self, overrides_dir: Optional[Path] = None) -> None:
        loaders = []
        if overrides_dir is not None:
            overrides = Path(overrides_dir)
            if not overrides.is_dir():
                raise FileNotFoundError(
                    f"Report override directory not found: {overrides}"
                )
            loaders.append(FileSystemLoader(str(overrides)))
        loaders.append(FileSystemLoader(str(BUILTIN_TEMPLATES)))
        self._env = Environment(
            loader=ChoiceLoader(loaders),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def unstubbed_call(
        self,
        error: "UnstubbedCallError",
        *,
        max_repr_length: Optional[int] = None,
    ) -> str:
        """Describe the call, its arguments and the stubs that missed it."""

        length = max_repr_length or error.max_repr_length
        template = self._template(UNSTUBBED_CALL_TEMPLATE)
        return template.render(
            identifier=error.identifier,
            arguments=format_args(error.arguments, length),
            show_candidates=error.include_candidates,
            candidate_count=len(error.candidates),
            candidates=_candidate_rows(error),
        )

    def _template(self, name: str) -> Template:
        try:
            return self._env.get_template(name)
        except TemplateNotFound as exc:
            raise FileNotFoundError(
                f"Report template '{name}' not found"
            ) from exc


def _candidate_rows(error: "UnstubbedCallError") -> List[Dict[str, Any]]:
    received = len(error.arguments)
    rows = []
    for stub in error.candidates:
        expected = len(stub.matchers)
        rows.append(
            {
                "description": stub.describe(),
                "expected_arity": expected,
                "arity_mismatch": bool(expected) and expected != received,
                "complete": stub.is_complete,
            }
        )
    return rows
