"""Exceptions raised around the engine (never by its decisions)."""

from __future__ import annotations

from pathlib import Path


class WardenError(Exception):
    """Base class for Warden errors."""


class PolicyError(WardenError):
    """A policy document could not be read or validated."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)
