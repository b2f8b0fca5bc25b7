# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Logging helpers (argument formatting, rotating logs)."""

from __future__ import annotations

import logging

from logging.handlers import RotatingFileHandler
from pathlib import Path
from reprlib import Repr
from typing import Any, Sequence

from stubwork.constants import DEFAULT_LOGGER_NAME, DEFAULT_MAX_REPR_LENGTH


def safe_repr(value: Any, max_length: int = DEFAULT_MAX_REPR_LENGTH) -> str:
    """Return a truncated ``repr`` that never raises."""

    shortener = Repr()
    shortener.maxstring = max_length
    shortener.maxother = max_length
    try:
        text = shortener.repr(value)
    except Exception as exc:  # noqa: BLE001 - user objects may break repr
        text = f"<unrepresentable {type(value).__name__}: {exc}>"
    if len(text) > max_length:
        text = text[: max_length - 3] + "..."
    return text


def format_args(
    args: Sequence[Any], max_length: int = DEFAULT_MAX_REPR_LENGTH
) -> str:
    """Render a call's argument list for log lines and reports."""

    return "(" + ", ".join(safe_repr(arg, max_length) for arg in args) + ")"


def setup_file_logger(
    log_file: Path, name: str = DEFAULT_LOGGER_NAME
) -> RotatingFileHandler:
    """Attach a rotating file handler for ``log_file`` to ``name``.

    Idempotent per file: a second caller shares the existing handler.
    Every call must be paired with ``teardown_file_logger``.
    """

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    if logger.level == logging.NOTSET or logger.level > logging.DEBUG:
        logger.setLevel(logging.DEBUG)
    marker = str(log_file)
    for handler in logger.handlers:
        if (
            isinstance(handler, RotatingFileHandler)
            and getattr(handler, "_stubwork_tag", None) == marker
        ):
            handler._stubwork_users += 1  # type: ignore[attr-defined]
            return handler
    file_handler = RotatingFileHandler(
        log_file, maxBytes=2_000_000, backupCount=3
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
    file_handler._stubwork_tag = marker  # type: ignore[attr-defined]
    file_handler._stubwork_users = 1  # type: ignore[attr-defined]
    logger.addHandler(file_handler)
    return file_handler


def teardown_file_logger(
    handler: logging.Handler, name: str = DEFAULT_LOGGER_NAME
) -> None:
    """Release one use of ``handler``; detach and close it after the last."""

    users = getattr(handler, "_stubwork_users", 1) - 1
    handler._stubwork_users = users  # type: ignore[attr-defined]
    if users > 0:
        return
    logging.getLogger(name).removeHandler(handler)
    handler.close()
