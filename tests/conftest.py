from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <artifactId>orders-api</artifactId>
  <properties>
    <mule.version>4.3.0</mule.version>
    <munit.version>3.2.0</munit.version>
    <mule.maven.plugin.version>4.1.0</mule.maven.plugin.version>
    <app.runtime>4.2.2</app.runtime>
  </properties>
</project>
"""

ARTIFACT_TEMPLATE = {
    "minMuleVersion": "4.3.0",
    "requiredProduct": {"javaSpecificationVersions": ["8"]},
}

FLOW_TEMPLATE = """<mule>
  <flow name="orders">
    <foo:listener path="/orders"/>
    <logger message="foo handled"/>
  </flow>
</mule>
"""

CONFIG_PAYLOAD: dict[str, Any] = {
    "app_runtime_version": "4.9.4",
    "mule_maven_plugin_version": "4.3.1",
    "munit_version": "3.4.0",
    "mule_artifact": {
        "min_mule_version": "4.9.0",
        "java_specification_versions": ["17"],
    },
    "replacements": [{"from": "foo", "to": "bar"}],
}


@pytest.fixture
def mule_project(tmp_path: Path) -> Path:
    root = tmp_path / "orders-api"
    flows = root / "src" / "main" / "mule"
    flows.mkdir(parents=True)
    (root / "pom.xml").write_text(POM_TEMPLATE, encoding="utf-8")
    (root / "mule-artifact.json").write_text(
        json.dumps(ARTIFACT_TEMPLATE, indent=2) + "\n", encoding="utf-8"
    )
    (flows / "orders.xml").write_text(FLOW_TEMPLATE, encoding="utf-8")
    return root


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    def _write(payload: dict[str, Any] | None = None, **overrides: Any) -> Path:
        data = dict(CONFIG_PAYLOAD if payload is None else payload)
        data.update(overrides)
        path = tmp_path / "migration.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


def snapshot_tree(root: Path) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def tree_snapshot() -> Callable[[Path], dict[str, bytes]]:
    return snapshot_tree
