"""Run result aggregation and change sinks.

The updaters report every change through a :class:`ChangeSink`. The
orchestrator fans events out to a :class:`RunResult` (consumed once by the
reporter) and a :class:`LoggingSink` (progress output while the run is in
flight), so a single code path feeds both outputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence


class ChangeSink(Protocol):
    """Receiver for change events emitted while a run progresses."""

    def file_changed(self, path: Path) -> None:
        ...

    def property_changed(self, description: str) -> None:
        ...

    def json_field_changed(self, description: str) -> None:
        ...

    def replacement(self, description: str, count: int) -> None:
        ...

    def warning(self, message: str) -> None:
        ...


@dataclass
class RunResult:
    """In-memory aggregate of every change and warning for one run."""

    dry_run: bool = False
    changed_files: List[str] = field(default_factory=list)
    changed_properties: List[str] = field(default_factory=list)
    changed_json: List[str] = field(default_factory=list)
    replacements: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def file_changed(self, path: Path) -> None:
        text = str(path)
        if text not in self.changed_files:
            self.changed_files.append(text)

    def property_changed(self, description: str) -> None:
        self.changed_properties.append(description)

    def json_field_changed(self, description: str) -> None:
        self.changed_json.append(description)

    def replacement(self, description: str, count: int) -> None:
        # Occurrence counts only go to the log; the summary lists one entry per rule.
        self.replacements.append(description)

    def warning(self, message: str) -> None:
        self.errors.append(message)

    @property
    def has_changes(self) -> bool:
        return bool(
            self.changed_files
            or self.changed_properties
            or self.changed_json
            or self.replacements
        )

    @property
    def is_empty(self) -> bool:
        return not self.has_changes and not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dry_run": self.dry_run,
            "changed_files": list(self.changed_files),
            "changed_properties": list(self.changed_properties),
            "changed_json": list(self.changed_json),
            "replacements": list(self.replacements),
            "errors": list(self.errors),
        }


class LoggingSink:
    """Sink that writes each change event to a :mod:`logging` logger."""

    def __init__(self, logger: logging.Logger | None = None, *, dry_run: bool = False) -> None:
        self.logger = logger or logging.getLogger("mule_lazy_migrate")
        self.dry_run = dry_run

    def _prefix(self) -> str:
        return "[DRY-RUN] " if self.dry_run else ""

    def file_changed(self, path: Path) -> None:
        verb = "Would update" if self.dry_run else "Updated"
        self.logger.info("%s%s %s", self._prefix(), verb, path)

    def property_changed(self, description: str) -> None:
        self.logger.info("  Updating property %s", description)

    def json_field_changed(self, description: str) -> None:
        self.logger.info("  Updating %s", description)

    def replacement(self, description: str, count: int) -> None:
        self.logger.info("  Replacing %s (%d occurrences)", description, count)

    def warning(self, message: str) -> None:
        self.logger.warning("%s", message)


class MultiSink:
    """Forward every event to each of ``sinks`` in order."""

    def __init__(self, *sinks: ChangeSink) -> None:
        self.sinks: Sequence[ChangeSink] = tuple(sinks)

    def file_changed(self, path: Path) -> None:
        for sink in self.sinks:
            sink.file_changed(path)

    def property_changed(self, description: str) -> None:
        for sink in self.sinks:
            sink.property_changed(description)

    def json_field_changed(self, description: str) -> None:
        for sink in self.sinks:
            sink.json_field_changed(description)

    def replacement(self, description: str, count: int) -> None:
        for sink in self.sinks:
            sink.replacement(description, count)

    def warning(self, message: str) -> None:
        for sink in self.sinks:
            sink.warning(message)


__all__ = ["ChangeSink", "LoggingSink", "MultiSink", "RunResult"]
