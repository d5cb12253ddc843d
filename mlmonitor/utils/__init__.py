"""Shared utilities: exception hierarchy and structured logging."""

from mlmonitor.utils.errors import (
    ConfigurationError,
    ConflictError,
    FlagUpdateError,
    MLMonitorError,
    NotFoundError,
    PayloadValidationError,
    ReferentialViolationError,
    StoreUnavailableError,
)
from mlmonitor.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "ConflictError",
    "FlagUpdateError",
    "MLMonitorError",
    "NotFoundError",
    "PayloadValidationError",
    "ReferentialViolationError",
    "StoreUnavailableError",
    "configure_logging",
    "get_logger",
]
