"""Service layer logging utilities.

Provides structured logging helpers so every stock-affecting operation
logs in the same shape.

Usage:
    from candystore.domain.service.logging_utils import (
        get_service_logger,
        log_operation,
    )

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="add_to_cart",
        outcome="success",
        user_id="u-1",
        recipe_id=4,
        quantity=2,
    )
"""

from __future__ import annotations

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_service_logger(name: str) -> logging.Logger:
    """Return a logger under the ``candystore.services`` prefix.

    Only the last component of a dotted module path is kept, so
    ``candystore.application.add_to_cart`` logs as
    ``candystore.services.add_to_cart``.
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"candystore.services.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """Log a service operation with structured context.

    The message reads ``"<operation>: <outcome>"`` followed by the context
    as ``key=value`` pairs; the same fields are attached to the record via
    ``extra`` for structured handlers.
    """
    extra = {"operation": operation, "outcome": outcome, **context}
    details = " ".join(f"{key}={value}" for key, value in context.items())
    message = f"{operation}: {outcome}"
    if details:
        message = f"{message} ({details})"
    logger.log(level, message, extra=extra)


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure the root logger once per process (CLI and API entry points)."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
