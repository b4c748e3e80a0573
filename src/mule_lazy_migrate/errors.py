"""Exception hierarchy shared by the migration pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - import only for type hints
    from .result import RunResult


class MigrationError(RuntimeError):
    """Base class for failures that abort a migration run.

    ``result`` carries whatever the run had recorded before the failure so
    callers can still render a summary.
    """

    def __init__(self, message: str, *, result: Optional["RunResult"] = None) -> None:
        super().__init__(message)
        self.result = result


class ConfigError(MigrationError, ValueError):
    """Raised when the migration config cannot be read or is invalid."""


class ProjectError(MigrationError):
    """Raised when the target directory is not a recognised Mule project."""


class DescriptorError(MigrationError, ValueError):
    """Raised when a descriptor file cannot be parsed."""


class MigrationIOError(MigrationError):
    """Represents an I/O failure while reading or persisting a file."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {self.reason}")

    def __repr__(self) -> str:  # pragma: no cover - trivial wrapper
        return f"MigrationIOError(path={str(self.path)!r}, reason={self.reason!r})"


__all__ = [
    "ConfigError",
    "DescriptorError",
    "MigrationError",
    "MigrationIOError",
    "ProjectError",
]
