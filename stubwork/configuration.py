"""Typed helpers for parsing stubwork configuration."""

from __future__ import annotations

import logging
import os

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from dotenv import find_dotenv, load_dotenv

from stubwork.constants import (
    DEFAULT_MAX_REPR_LENGTH,
    ENV_CONFIG_PATH,
    ENV_LOG_FILE,
    ENV_RESOLUTION_ORDER,
    ORDER_MOST_RECENT,
    RESOLUTION_ORDERS,
)
from stubwork.exceptions import StubworkConfigError

LOGGER = logging.getLogger(__name__)


def _resolve_path(
    value: Union[str, Path],
    *,
    config_root: Path,
) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (config_root / path).resolve()
    return path


def _coerce_bool(value: Any, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    if isinstance(value, int):
        return bool(value)
    raise StubworkConfigError(f"'{key}' must be a boolean, got {value!r}")


@dataclass(frozen=True)
class StubworkSettings:
    """Engine behaviour switches."""

    resolution_order: str = ORDER_MOST_RECENT
    record_calls: bool = True
    log_resolutions: bool = False
    report_candidates: bool = True
    log_file: Optional[Path] = None
    max_repr_length: int = DEFAULT_MAX_REPR_LENGTH

    def __post_init__(self) -> None:
        if self.resolution_order not in RESOLUTION_ORDERS:
            raise StubworkConfigError(
                f"Unknown resolution order '{self.resolution_order}' "
                f"(expected one of {', '.join(RESOLUTION_ORDERS)})"
            )
        if self.max_repr_length < 8:
            raise StubworkConfigError("max_repr_length must be at least 8")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resolution_order": self.resolution_order,
            "record_calls": self.record_calls,
            "log_resolutions": self.log_resolutions,
            "report_candidates": self.report_candidates,
            "log_file": str(self.log_file) if self.log_file else None,
            "max_repr_length": self.max_repr_length,
        }


def build_settings(
    config: Optional[Mapping[str, Any]],
    *,
    config_root: Optional[Path] = None,
) -> StubworkSettings:
    """Build settings from a raw mapping.

    Accepts either the bare settings mapping or one nested under a
    top-level ``stubwork`` key.
    """

    cfg = dict(config or {})
    if isinstance(cfg.get("stubwork"), Mapping):
        cfg = dict(cfg["stubwork"])
    root = config_root or Path.cwd()
    log_file = cfg.get("log_file")
    try:
        max_repr_length = int(
            cfg.get("max_repr_length", DEFAULT_MAX_REPR_LENGTH)
        )
    except (TypeError, ValueError) as exc:
        raise StubworkConfigError(
            f"max_repr_length must be an integer: {exc}"
        ) from exc
    return StubworkSettings(
        resolution_order=str(
            cfg.get("resolution_order", ORDER_MOST_RECENT)
        ).lower(),
        record_calls=_coerce_bool(
            cfg.get("record_calls", True), key="record_calls"
        ),
        log_resolutions=_coerce_bool(
            cfg.get("log_resolutions", False), key="log_resolutions"
        ),
        report_candidates=_coerce_bool(
            cfg.get("report_candidates", True), key="report_candidates"
        ),
        log_file=(
            _resolve_path(log_file, config_root=root) if log_file else None
        ),
        max_repr_length=max_repr_length,
    )


def load_settings(path: Union[str, Path]) -> StubworkSettings:
    """Load settings from a YAML file."""

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise StubworkConfigError(f"Config file {config_path} not found")
    with config_path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise StubworkConfigError(
                f"Invalid YAML in {config_path}: {exc}"
            ) from exc
    if not isinstance(data, Mapping):
        raise StubworkConfigError(
            f"Config file {config_path} must contain a mapping"
        )
    LOGGER.info("Loaded stubwork settings from %s", config_path)
    return build_settings(data, config_root=config_path.resolve().parent)


def settings_from_env(
    environ: Optional[Mapping[str, str]] = None,
    *,
    use_dotenv: bool = True,
) -> StubworkSettings:
    """Build settings from ``STUBWORK_*`` environment variables.

    ``STUBWORK_CONFIG`` names a YAML file; ``STUBWORK_RESOLUTION_ORDER`` and
    ``STUBWORK_LOG_FILE`` override individual values.
    """

    if use_dotenv and environ is None:
        load_dotenv(find_dotenv(usecwd=True))
    env = os.environ if environ is None else environ
    config_path = env.get(ENV_CONFIG_PATH)
    if config_path:
        base = load_settings(config_path).to_dict()
        config_root = Path(config_path).expanduser().resolve().parent
    else:
        base = StubworkSettings().to_dict()
        config_root = Path.cwd()
    order = env.get(ENV_RESOLUTION_ORDER)
    if order:
        base["resolution_order"] = order
    log_file = env.get(ENV_LOG_FILE)
    if log_file:
        base["log_file"] = log_file
    return build_settings(base, config_root=config_root)


__all__ = [
    "StubworkSettings",
    "build_settings",
    "load_settings",
    "settings_from_env",
]
