"""Updaters for the two Mule project descriptors.

``pom.xml`` properties are rewritten with a text scan so formatting and
comments survive; ``mule-artifact.json`` is rewritten from its parsed form.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from .config import MigrationConfig
from .errors import DescriptorError
from .fileio import FileWriter
from .properties import (
    JsonField,
    PropertyUpdate,
    update_json_fields,
    update_properties,
    xml_is_well_formed,
)
from .result import ChangeSink

logger = logging.getLogger(__name__)

POM_FILE = "pom.xml"
ARTIFACT_FILE = "mule-artifact.json"


def pom_properties(config: MigrationConfig) -> Tuple[Tuple[str, str], ...]:
    """Return the ``pom.xml`` properties to enforce, in update order."""

    return (
        ("mule.version", config.app_runtime_version),
        ("munit.version", config.munit_version),
        ("mule.maven.plugin.version", config.mule_maven_plugin_version),
        ("app.runtime", config.app_runtime_version),
    )


def artifact_fields(config: MigrationConfig) -> Tuple[JsonField, ...]:
    artifact = config.mule_artifact
    return (
        JsonField("minMuleVersion", artifact.min_mule_version),
        JsonField(
            "requiredProduct.javaSpecificationVersions",
            list(artifact.java_specification_versions),
        ),
    )


def _finish(path: Path, update: PropertyUpdate, *, writer: FileWriter, sink: ChangeSink) -> None:
    if not update.changed:
        logger.info("No changes needed for %s", path.name)
        return
    writer.write(path, update.content)
    sink.file_changed(path)


def update_pom_xml(
    path: Path,
    config: MigrationConfig,
    *,
    writer: FileWriter,
    sink: ChangeSink,
) -> PropertyUpdate:
    """Align the Mule, MUnit and plugin version properties in ``path``."""

    path = Path(path)
    content = writer.read(path, strict=True) or ""
    if not xml_is_well_formed(content):
        sink.warning(f"{path} is not well-formed XML; properties were updated by text match only")

    update = update_properties(content, pom_properties(config))
    for description in update.changes:
        sink.property_changed(description)
    _finish(path, update, writer=writer, sink=sink)
    return update


def update_mule_artifact_json(
    path: Path,
    config: MigrationConfig,
    *,
    writer: FileWriter,
    sink: ChangeSink,
) -> PropertyUpdate:
    """Align ``minMuleVersion`` and the required Java versions in ``path``."""

    path = Path(path)
    content = writer.read(path, strict=True) or ""
    try:
        update = update_json_fields(content, artifact_fields(config))
    except DescriptorError as exc:
        raise DescriptorError(f"{path}: {exc}") from exc

    for description in update.changes:
        sink.json_field_changed(description)
    _finish(path, update, writer=writer, sink=sink)
    return update


__all__ = [
    "ARTIFACT_FILE",
    "POM_FILE",
    "artifact_fields",
    "pom_properties",
    "update_mule_artifact_json",
    "update_pom_xml",
]
