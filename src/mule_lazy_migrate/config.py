"""Migration config loading.

The config is a small JSON document describing the target runtime, the
descriptor values to enforce and the literal replacements to apply::

    {
      "app_runtime_version": "4.9.4",
      "mule_maven_plugin_version": "4.3.1",
      "munit_version": "3.4.0",
      "mule_artifact": {
        "min_mule_version": "4.9.0",
        "java_specification_versions": ["17"]
      },
      "replacements": [{"from": "foo", "to": "bar"}]
    }

``file_extensions`` and ``exclude`` are optional and tune which files the
bulk replacer visits.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence, Tuple

from .errors import ConfigError

DEFAULT_FILE_EXTENSIONS: Tuple[str, ...] = (
    "xml",
    "dwl",
    "yaml",
    "yml",
    "properties",
    "txt",
    "java",
    "groovy",
    "json",
)


def _require_str(payload: Mapping[str, Any], key: str, *, context: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{context} requires a non-empty string '{key}'.")
    return value.strip()


def _string_tuple(value: Any, *, key: str, context: str) -> Tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigError(f"{context} '{key}' must be a list of strings.")
    items = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"{context} '{key}' must only contain strings.")
        items.append(item)
    return tuple(items)


def _normalise_extension(value: str) -> str:
    return value.strip().lstrip(".").lower()


@dataclass(frozen=True)
class ReplacementRule:
    """Literal ``from`` -> ``to`` substitution applied to source files."""

    from_: str
    to: str

    def __post_init__(self) -> None:
        if not self.from_:
            raise ConfigError("Replacement rule requires a non-empty 'from' value.")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ReplacementRule":
        if not isinstance(payload, Mapping):
            raise ConfigError("Replacement rule must be an object with 'from' and 'to'.")
        source = payload.get("from")
        target = payload.get("to")
        if not isinstance(source, str) or not isinstance(target, str):
            raise ConfigError("Replacement rule 'from' and 'to' must be strings.")
        return cls(from_=source, to=target)

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_, "to": self.to}


@dataclass(frozen=True)
class MuleArtifactConfig:
    min_mule_version: str
    java_specification_versions: Tuple[str, ...]

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MuleArtifactConfig":
        if not isinstance(payload, Mapping):
            raise ConfigError("Config 'mule_artifact' must be an object.")
        context = "mule_artifact"
        return cls(
            min_mule_version=_require_str(payload, "min_mule_version", context=context),
            java_specification_versions=_string_tuple(
                payload.get("java_specification_versions"),
                key="java_specification_versions",
                context=context,
            ),
        )


@dataclass(frozen=True)
class MigrationConfig:
    app_runtime_version: str
    mule_maven_plugin_version: str
    munit_version: str
    mule_artifact: MuleArtifactConfig
    replacements: Tuple[ReplacementRule, ...] = ()
    file_extensions: Tuple[str, ...] = DEFAULT_FILE_EXTENSIONS
    exclude: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MigrationConfig":
        if not isinstance(payload, Mapping):
            raise ConfigError("Config payload must be a JSON object.")

        context = "Config"
        artifact_payload = payload.get("mule_artifact")
        if artifact_payload is None:
            raise ConfigError("Config requires a 'mule_artifact' object.")

        raw_rules = payload.get("replacements", ())
        if isinstance(raw_rules, (str, Mapping)) or not isinstance(raw_rules, Sequence):
            raise ConfigError("Config 'replacements' must be a list of rule objects.")
        rules = tuple(ReplacementRule.from_dict(entry) for entry in raw_rules)

        extensions = DEFAULT_FILE_EXTENSIONS
        if payload.get("file_extensions") is not None:
            extensions = tuple(
                ext
                for ext in (
                    _normalise_extension(value)
                    for value in _string_tuple(
                        payload["file_extensions"], key="file_extensions", context=context
                    )
                )
                if ext
            )
            if not extensions:
                raise ConfigError("Config 'file_extensions' must not be empty when provided.")

        exclude: Tuple[str, ...] = ()
        if payload.get("exclude") is not None:
            exclude = _string_tuple(payload["exclude"], key="exclude", context=context)

        return cls(
            app_runtime_version=_require_str(payload, "app_runtime_version", context=context),
            mule_maven_plugin_version=_require_str(
                payload, "mule_maven_plugin_version", context=context
            ),
            munit_version=_require_str(payload, "munit_version", context=context),
            mule_artifact=MuleArtifactConfig.from_dict(artifact_payload),
            replacements=rules,
            file_extensions=extensions,
            exclude=exclude,
        )


def load_config(path: Path | str) -> MigrationConfig:
    """Read and validate the JSON migration config at ``path``."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Unable to read config {path}: {exc}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config {path} is not valid JSON: {exc}") from exc
    return MigrationConfig.from_dict(payload)


__all__ = [
    "DEFAULT_FILE_EXTENSIONS",
    "MigrationConfig",
    "MuleArtifactConfig",
    "ReplacementRule",
    "load_config",
]
