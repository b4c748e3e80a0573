"""File reading and persistence helpers shared by the updaters.

Content is decoded from raw bytes so line endings round-trip unchanged.
Unreadable or undecodable files are skipped by the bulk replacer; any failure
while writing a file or its backup raises :class:`MigrationIOError` and ends
the run.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Dict, Optional, Set

from .errors import MigrationIOError

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"
_ENCODING = "utf-8"


def backup_path_for(path: Path) -> Path:
    """Return the sibling backup location for ``path`` (``pom.xml.bak``)."""

    return path.with_name(path.name + BACKUP_SUFFIX)


def read_text(path: Path, *, strict: bool = False) -> Optional[str]:
    """Return the UTF-8 text of ``path``.

    With ``strict`` disabled, files that cannot be read or decoded yield
    ``None``. With ``strict`` enabled the failure raises
    :class:`MigrationIOError`.
    """

    try:
        return Path(path).read_bytes().decode(_ENCODING)
    except UnicodeDecodeError as exc:
        if strict:
            raise MigrationIOError(path, f"not valid {_ENCODING} text ({exc.reason})") from exc
        logger.debug("Skipping %s: not valid %s text", path, _ENCODING)
        return None
    except OSError as exc:
        if strict:
            raise MigrationIOError(path, str(exc)) from exc
        logger.debug("Skipping %s: %s", path, exc)
        return None


class FileWriter:
    """Run-scoped writer honouring the dry-run and backup flags.

    In dry-run mode nothing touches the disk, backups included; pending
    content is kept in memory so later steps of the same run read what a real
    run would have written. A file is backed up at most once per run, so the
    backup always holds the content from before the run.
    """

    def __init__(self, *, dry_run: bool = False, backup: bool = False) -> None:
        self.dry_run = dry_run
        self.backup = backup
        self._pending: Dict[Path, str] = {}
        self._backed_up: Set[Path] = set()

    def read(self, path: Path, *, strict: bool = False) -> Optional[str]:
        path = Path(path)
        if path in self._pending:
            return self._pending[path]
        return read_text(path, strict=strict)

    def write(self, path: Path, content: str) -> Optional[Path]:
        """Persist ``content`` to ``path``; return the backup created, if any."""

        path = Path(path)
        if self.dry_run:
            self._pending[path] = content
            return None

        created: Optional[Path] = None
        if self.backup and path not in self._backed_up:
            created = backup_path_for(path)
            try:
                shutil.copy2(path, created)
            except OSError as exc:
                raise MigrationIOError(path, f"failed to create backup {created}: {exc}") from exc
            self._backed_up.add(path)
            logger.info("Backup created: %s", created)

        try:
            path.write_bytes(content.encode(_ENCODING))
        except OSError as exc:
            raise MigrationIOError(path, f"failed to write file: {exc}") from exc
        return created


__all__ = ["BACKUP_SUFFIX", "FileWriter", "backup_path_for", "read_text"]
