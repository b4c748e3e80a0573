"""Migration orchestration.

A run is strictly linear:

1. check the project markers (``pom.xml``, ``mule-artifact.json``);
2. load the migration config;
3. optionally upgrade Maven dependencies;
4. optionally build the project;
5. update ``pom.xml`` properties;
6. update ``mule-artifact.json`` fields;
7. apply the configured replacements across the source tree.

Failures in steps 1-2 abort before anything is written. External command
failures and a single missing or unparsable descriptor are warnings. A file
write failure ends the run. Every fatal error carries the partially filled
:class:`~mule_lazy_migrate.result.RunResult` so the caller can still print a
summary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .commands import CommandRunner, build_mule_project, update_maven_dependencies
from .config import MigrationConfig, load_config
from .descriptors import ARTIFACT_FILE, POM_FILE, update_mule_artifact_json, update_pom_xml
from .errors import ConfigError, DescriptorError, MigrationError, MigrationIOError, ProjectError
from .fileio import FileWriter
from .replacer import traverse_and_replace
from .result import ChangeSink, LoggingSink, MultiSink, RunResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationOptions:
    """Options for a single migration run."""

    config_path: Path
    project_root: Path = Path(".")
    dry_run: bool = False
    backup: bool = False
    update_maven_deps: bool = False
    build_mule_project: bool = False


def _fail(result: RunResult, error: MigrationError) -> MigrationError:
    logger.error("%s", error)
    result.errors.append(str(error))
    error.result = result
    return error


def _run_external(name: str, runner: CommandRunner, project_root: Path, sink: ChangeSink) -> None:
    outcome = runner(project_root)
    if not outcome.success:
        detail = f" ({outcome.description})" if outcome.description else ""
        sink.warning(f"{name} failed{detail}; continuing with migration")


def run_migration(
    options: MigrationOptions,
    *,
    dependency_updater: CommandRunner = update_maven_dependencies,
    builder: CommandRunner = build_mule_project,
    config: Optional[MigrationConfig] = None,
) -> RunResult:
    """Run the migration described by ``options`` and return its result.

    ``config`` skips loading ``options.config_path`` when already available.
    Raises :class:`~mule_lazy_migrate.errors.MigrationError` subclasses on
    fatal errors.
    """

    result = RunResult(dry_run=options.dry_run)
    sink = MultiSink(result, LoggingSink(logger, dry_run=options.dry_run))
    writer = FileWriter(dry_run=options.dry_run, backup=options.backup)
    project_root = Path(options.project_root)
    pom_path = project_root / POM_FILE
    artifact_path = project_root / ARTIFACT_FILE

    logger.info("Checking if '%s' is a Mule project...", project_root)
    has_pom = pom_path.is_file()
    has_artifact = artifact_path.is_file()
    if not has_pom and not has_artifact:
        raise _fail(
            result,
            ProjectError(
                f"'{project_root}' is not a recognized Mule project "
                f"({POM_FILE} and {ARTIFACT_FILE} missing)"
            ),
        )
    if not has_pom:
        sink.warning(f"No {POM_FILE} found at {pom_path}")
    if not has_artifact:
        sink.warning(f"No {ARTIFACT_FILE} found at {artifact_path}")

    if config is None:
        logger.info("Loading migration config from %s", options.config_path)
        try:
            config = load_config(options.config_path)
        except ConfigError as exc:
            _fail(result, exc)
            raise

    if options.update_maven_deps:
        _run_external("Maven dependency update", dependency_updater, project_root, sink)
    if options.build_mule_project:
        _run_external("Maven build", builder, project_root, sink)

    try:
        if has_pom:
            logger.info("Updating %s at %s", POM_FILE, pom_path)
            update_pom_xml(pom_path, config, writer=writer, sink=sink)

        if has_artifact:
            logger.info("Updating %s at %s", ARTIFACT_FILE, artifact_path)
            try:
                update_mule_artifact_json(
                    artifact_path,
                    config,
                    writer=writer,
                    sink=sink,
                )
            except DescriptorError as exc:
                sink.warning(f"Skipped {ARTIFACT_FILE}: {exc}")

        traverse_and_replace(
            project_root,
            config.replacements,
            writer=writer,
            sink=sink,
            extensions=config.file_extensions,
            exclude=config.exclude,
        )
    except MigrationIOError as exc:
        _fail(result, exc)
        raise

    return result


__all__ = ["MigrationOptions", "run_migration"]
