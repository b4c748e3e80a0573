"""External Maven invocations used as optional migration steps.

The orchestrator only needs a pass/fail outcome, so each step is a
:data:`CommandRunner` callable that tests can replace with a stub.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

logger = logging.getLogger(__name__)

MAVEN_EXECUTABLE = "mvn"
VERSIONS_BACKUP_FILE = "pom.xml.versionsBackup"


@dataclass(frozen=True)
class CommandOutcome:
    success: bool
    output: str = ""
    description: str = ""


CommandRunner = Callable[[Path], CommandOutcome]


def run_command(command: Sequence[str], cwd: Path) -> CommandOutcome:
    """Run ``command`` in ``cwd`` and capture its combined output.

    The output is logged at ERROR level when the command fails and at DEBUG
    level otherwise.
    """

    display = " ".join(command)
    logger.info("Running '%s' in %s", display, cwd)
    try:
        completed = subprocess.run(
            list(command),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.error("Failed to run '%s': %s", display, exc)
        return CommandOutcome(success=False, output=str(exc), description=display)

    output = (completed.stdout or "") + (completed.stderr or "")
    if completed.returncode != 0:
        if output.strip():
            logger.error("'%s' output:\n%s", display, output.rstrip())
        logger.error("'%s' exited with status %s", display, completed.returncode)
        return CommandOutcome(success=False, output=output, description=display)
    if output.strip():
        logger.debug("'%s' output:\n%s", display, output.rstrip())
    return CommandOutcome(success=True, output=output, description=display)


def update_maven_dependencies(project_root: Path) -> CommandOutcome:
    """Bump Maven dependencies to their latest releases.

    The ``versions`` plugin leaves a ``pom.xml.versionsBackup`` next to the
    pom; it is removed afterwards whatever the outcome.
    """

    project_root = Path(project_root)
    outcome = run_command([MAVEN_EXECUTABLE, "versions:use-latest-releases"], project_root)
    if outcome.success:
        logger.info("Maven dependencies updated to latest releases.")

    leftover = project_root / VERSIONS_BACKUP_FILE
    if leftover.exists():
        try:
            leftover.unlink()
        except OSError as exc:
            logger.warning("Failed to remove Maven backup file %s: %s", leftover, exc)
        else:
            logger.info("Removed Maven backup file: %s", leftover)
    return outcome


def build_mule_project(project_root: Path) -> CommandOutcome:
    """Run ``mvn clean install`` in ``project_root``."""

    outcome = run_command([MAVEN_EXECUTABLE, "clean", "install"], Path(project_root))
    if outcome.success:
        logger.info("Mule project built successfully.")
    return outcome


__all__ = [
    "CommandOutcome",
    "CommandRunner",
    "build_mule_project",
    "run_command",
    "update_maven_dependencies",
]
