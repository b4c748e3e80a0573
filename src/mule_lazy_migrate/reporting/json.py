"""JSON rendering of a migration result for scripted callers."""

from __future__ import annotations

import json
from typing import Any, Mapping, TextIO

from ..result import RunResult

__all__ = ["result_payload", "render_json", "write_json"]


def result_payload(result: RunResult, *, status: str = "ok") -> Mapping[str, Any]:
    payload = dict(result.to_dict())
    payload["status"] = status
    payload["changed"] = result.has_changes
    return payload


def render_json(result: RunResult, *, status: str = "ok") -> str:
    return json.dumps(result_payload(result, status=status), indent=2, sort_keys=True)


def write_json(result: RunResult, stream: TextIO, *, status: str = "ok") -> None:
    stream.write(render_json(result, status=status))
    stream.write("\n")
