"""mule-lazy-migrate core package.

Idempotent, config-driven migration of Mule 4 projects: version properties in
``pom.xml``, fields in ``mule-artifact.json`` and literal replacements across
the source tree, followed by a summary of what changed.
"""

from __future__ import annotations

from .config import MigrationConfig, MuleArtifactConfig, ReplacementRule, load_config
from .errors import (
    ConfigError,
    DescriptorError,
    MigrationError,
    MigrationIOError,
    ProjectError,
)
from .migration import MigrationOptions, run_migration
from .properties import JsonField, PropertyUpdate, update_json_fields, update_property
from .replacer import traverse_and_replace
from .result import ChangeSink, LoggingSink, MultiSink, RunResult

__version__ = "0.3.0"

__all__ = [
    "ChangeSink",
    "ConfigError",
    "DescriptorError",
    "JsonField",
    "LoggingSink",
    "MigrationConfig",
    "MigrationError",
    "MigrationIOError",
    "MigrationOptions",
    "MuleArtifactConfig",
    "MultiSink",
    "ProjectError",
    "PropertyUpdate",
    "ReplacementRule",
    "RunResult",
    "load_config",
    "run_migration",
    "traverse_and_replace",
    "update_json_fields",
    "update_property",
]
