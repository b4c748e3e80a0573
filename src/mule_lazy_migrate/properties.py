"""Pure property updaters for descriptor content.

Examples
--------
>>> update = update_property(
...     "<properties><mule.version>4.3.0</mule.version></properties>",
...     "mule.version",
...     "4.9.4",
... )
>>> update.changed, update.changes
(True, ["mule.version: '4.3.0' -> '4.9.4'"])
>>> update.content
'<properties><mule.version>4.9.4</mule.version></properties>'
>>> update_property(update.content, "mule.version", "4.9.4").changed
False
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Sequence, Tuple

from defusedxml import ElementTree as DefusedET
from defusedxml.common import DefusedXmlException

from .errors import DescriptorError

_BOM = "\ufeff"


@dataclass(frozen=True)
class PropertyUpdate:
    """Outcome of an update: change flag, descriptions, resulting content."""

    changed: bool
    changes: List[str] = field(default_factory=list)
    content: str = ""


@dataclass(frozen=True)
class JsonField:
    """JSON field addressed by ``key`` or ``parent.key`` (one nesting level)."""

    path: str
    value: Any

    def parts(self) -> Tuple[str, ...]:
        return tuple(self.path.split(".", 1))


def _property_pattern(name: str) -> re.Pattern[str]:
    escaped = re.escape(name)
    return re.compile(rf"(<{escaped}>)([^<]*)(</{escaped}>)")


def update_property(content: str, name: str, value: str) -> PropertyUpdate:
    """Set every ``<name>...</name>`` body in ``content`` to ``value``.

    Surrounding whitespace is ignored when comparing; matching bodies are
    left byte-for-byte as they were.
    """

    changes: List[str] = []

    def _replace(match: re.Match[str]) -> str:
        current = match.group(2).strip()
        if current == value:
            return match.group(0)
        changes.append(f"{name}: '{current}' -> '{value}'")
        return f"{match.group(1)}{value}{match.group(3)}"

    updated = _property_pattern(name).sub(_replace, content)
    return PropertyUpdate(changed=bool(changes), changes=changes, content=updated)


def update_properties(content: str, values: Mapping[str, str] | Iterable[Tuple[str, str]]) -> PropertyUpdate:
    """Apply :func:`update_property` for each ``(name, value)`` in order."""

    pairs = values.items() if isinstance(values, Mapping) else values
    changes: List[str] = []
    for name, value in pairs:
        update = update_property(content, name, value)
        content = update.content
        changes.extend(update.changes)
    return PropertyUpdate(changed=bool(changes), changes=changes, content=content)


def _describe(value: Any) -> str:
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_describe(item) for item in value) + "]"
    return json.dumps(value)


def _normalise(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_normalise(item) for item in value]
    if isinstance(value, list):
        return [_normalise(item) for item in value]
    return value


def update_json_fields(content: str, fields: Sequence[JsonField]) -> PropertyUpdate:
    """Set each present field of the JSON document in ``content``.

    Missing fields and missing parent objects are left alone. The document is
    re-serialised with two-space indentation only when a value changed. A
    leading byte order mark is kept.
    """

    bom = _BOM if content.startswith(_BOM) else ""
    try:
        document = json.loads(content[len(bom):])
    except json.JSONDecodeError as exc:
        raise DescriptorError(f"Invalid JSON: {exc}") from exc

    changes: List[str] = []
    for json_field in fields:
        parts = json_field.parts()
        container: Any = document
        for parent in parts[:-1]:
            container = container.get(parent) if isinstance(container, dict) else None
        if not isinstance(container, dict) or parts[-1] not in container:
            continue

        desired = _normalise(json_field.value)
        current = container[parts[-1]]
        if current == desired:
            continue
        changes.append(f"{json_field.path}: {_describe(current)} -> {_describe(desired)}")
        container[parts[-1]] = desired

    if not changes:
        return PropertyUpdate(changed=False, changes=[], content=content)

    rendered = bom + json.dumps(document, indent=2, ensure_ascii=False)
    if content.endswith("\n"):
        rendered += "\n"
    return PropertyUpdate(changed=True, changes=changes, content=rendered)


def xml_is_well_formed(content: str) -> bool:
    """Return ``True`` when ``content`` parses with the hardened XML parser."""

    try:
        DefusedET.fromstring(content.encode("utf-8"))
    except (DefusedET.ParseError, DefusedXmlException):
        return False
    return True


__all__ = [
    "JsonField",
    "PropertyUpdate",
    "update_json_fields",
    "update_properties",
    "update_property",
    "xml_is_well_formed",
]
