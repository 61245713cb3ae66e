"""Exceptions raised by the job analytics package."""

from __future__ import annotations

from pathlib import Path


class AnalyticsError(Exception):
    """Base class for job analytics errors."""


class RecordLoadError(AnalyticsError):
    """
    Raised when a job record dump cannot be read.

    Attributes:
        path: File that failed to load
    """

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)


class PolicyError(AnalyticsError):
    """Raised when an insight policy references an unknown rule or signal."""
