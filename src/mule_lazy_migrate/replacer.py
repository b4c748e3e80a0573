"""Bulk literal replacements across a project tree."""

from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Iterator, List, Sequence, Tuple

from .config import DEFAULT_FILE_EXTENSIONS, ReplacementRule
from .fileio import FileWriter
from .result import ChangeSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplaceStats:
    files_scanned: int = 0
    files_changed: int = 0


def _should_exclude(relative: Path, patterns: Sequence[str]) -> bool:
    if not patterns:
        return False
    text = relative.as_posix()
    for pattern in patterns:
        if fnmatch.fnmatch(text, pattern) or fnmatch.fnmatch(relative.name, pattern):
            return True
    return False


def _should_prune(relative: Path, patterns: Sequence[str]) -> bool:
    # "target/*" also prunes "target" itself.
    if _should_exclude(relative, patterns):
        return True
    text = relative.as_posix() + "/"
    return any(fnmatch.fnmatch(text, pattern) for pattern in patterns)


def iter_candidate_files(
    root: Path,
    extensions: Collection[str] = DEFAULT_FILE_EXTENSIONS,
    exclude: Sequence[str] = (),
) -> Iterator[Path]:
    """Yield regular files below ``root`` whose extension is allowed.

    Symbolic links are never followed, neither for files nor directories.
    Directories matching an ``exclude`` pattern are not descended into.
    Files are produced in directory-walk order, which is not stable across
    platforms.
    """

    root = Path(root)
    allowed = {ext.lower() for ext in extensions}
    for dirpath, dirnames, filenames in os.walk(root):
        if exclude:
            current = Path(dirpath)
            dirnames[:] = [
                name
                for name in dirnames
                if not _should_prune((current / name).relative_to(root), exclude)
            ]
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.is_symlink() or not path.is_file():
                continue
            if path.suffix[1:].lower() not in allowed:
                continue
            if _should_exclude(path.relative_to(root), exclude):
                continue
            yield path


def apply_rules(content: str, rules: Sequence[ReplacementRule]) -> Tuple[str, List[Tuple[ReplacementRule, int]]]:
    """Apply ``rules`` left to right and report the ones that matched.

    Each rule sees the output of the rules before it.
    """

    applied: List[Tuple[ReplacementRule, int]] = []
    for rule in rules:
        count = content.count(rule.from_)
        if not count:
            continue
        content = content.replace(rule.from_, rule.to)
        applied.append((rule, count))
    return content, applied


def traverse_and_replace(
    root: Path,
    rules: Sequence[ReplacementRule],
    *,
    writer: FileWriter,
    sink: ChangeSink,
    extensions: Collection[str] = DEFAULT_FILE_EXTENSIONS,
    exclude: Sequence[str] = (),
) -> ReplaceStats:
    """Apply ``rules`` to every candidate file under ``root``.

    Files that cannot be read as UTF-8 text are skipped silently. Write and
    backup failures propagate as :class:`~mule_lazy_migrate.errors.MigrationIOError`.
    """

    if not rules:
        logger.info("No replacement rules configured; skipping source scan")
        return ReplaceStats()

    logger.info("Scanning for files with extensions: %s", ", ".join(sorted(extensions)))
    for index, rule in enumerate(rules, start=1):
        logger.debug("  %d. '%s' -> '%s'", index, rule.from_, rule.to)

    scanned = 0
    changed = 0
    for path in iter_candidate_files(root, extensions, exclude):
        content = writer.read(path)
        if content is None:
            continue
        scanned += 1

        new_content, applied = apply_rules(content, rules)
        if not applied or new_content == content:
            continue

        for rule, count in applied:
            sink.replacement(f"{path}: '{rule.from_}' -> '{rule.to}'", count)
        writer.write(path, new_content)
        sink.file_changed(path)
        changed += 1

    logger.info("Processed %d files, updated %d files", scanned, changed)
    return ReplaceStats(files_scanned=scanned, files_changed=changed)


__all__ = ["ReplaceStats", "apply_rules", "iter_candidate_files", "traverse_and_replace"]
