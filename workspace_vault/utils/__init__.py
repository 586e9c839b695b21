"""Utility modules for workspace-vault."""

from .logging import (
    get_logger,
    setup_logging,
)


__all__ = [
    "setup_logging",
    "get_logger",
]
