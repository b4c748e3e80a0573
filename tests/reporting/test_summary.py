from __future__ import annotations

import io
import json

from rich.console import Console

from mule_lazy_migrate.reporting import (
    print_summary,
    render_json,
    render_summary,
    summary_lines,
)
from mule_lazy_migrate.reporting.summary import DRY_RUN_BANNER, FOOTER, HEADER, UP_TO_DATE
from mule_lazy_migrate.result import RunResult


def _populated() -> RunResult:
    return RunResult(
        changed_files=["pom.xml"],
        changed_properties=["mule.version: '4.3.0' -> '4.9.4'"],
        changed_json=["minMuleVersion: '4.3.0' -> '4.9.0'"],
        replacements=["src/flow.xml: 'foo' -> 'bar'"],
        errors=["No mule-artifact.json found at ./mule-artifact.json"],
    )


def test_summary_lists_sections_in_fixed_order() -> None:
    texts = [text for text, _style in summary_lines(_populated())]

    assert texts[0] == HEADER
    assert texts[-1] == FOOTER
    headings = [text for text in texts if text.endswith(":")]
    assert headings == [
        "Changed files:",
        "Updated properties:",
        "Updated JSON fields:",
        "String replacements:",
        "Warnings/Errors:",
    ]
    assert "  src/flow.xml: 'foo' -> 'bar'" in texts
    assert UP_TO_DATE not in texts
    assert DRY_RUN_BANNER not in texts


def test_summary_styles_follow_section_severity() -> None:
    styles = dict(summary_lines(_populated()))

    assert styles["Changed files:"] == "bold green"
    assert styles["String replacements:"] == "bold yellow"
    assert styles["Warnings/Errors:"] == "bold red"
    assert styles[HEADER] == "bold blue"


def test_summary_reports_up_to_date_and_dry_run() -> None:
    texts = render_summary(RunResult(dry_run=True)).splitlines()

    assert texts == [HEADER, DRY_RUN_BANNER, UP_TO_DATE, FOOTER]


def test_summary_with_only_warnings_is_not_up_to_date() -> None:
    result = RunResult(errors=["Maven build failed"])

    assert UP_TO_DATE not in render_summary(result)


def test_print_summary_writes_through_console() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, color_system=None, width=200)

    print_summary(RunResult(dry_run=True, changed_files=["pom.xml"]), console)

    output = buffer.getvalue()
    assert "MIGRATION SUMMARY" in output
    assert "[DRY-RUN] No files were actually changed" in output
    assert "pom.xml" in output


def test_render_json_includes_status() -> None:
    payload = json.loads(render_json(_populated(), status="failed"))

    assert payload["status"] == "failed"
    assert payload["changed"] is True
    assert payload["changed_files"] == ["pom.xml"]
    assert payload["dry_run"] is False
