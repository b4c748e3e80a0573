"""Human-readable migration summary.

:func:`summary_lines` is pure formatting: it turns a
:class:`~mule_lazy_migrate.result.RunResult` into styled lines, which
:func:`print_summary` hands to a :class:`rich.console.Console`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.text import Text

from ..result import RunResult

HEADER = "================ MIGRATION SUMMARY ================"
FOOTER = "=" * 50
DRY_RUN_BANNER = "[DRY-RUN] No files were actually changed"
UP_TO_DATE = "No changes were needed. Project is up to date!"

_BANNER_STYLE = "bold blue"

StyledLine = Tuple[str, str]


def _section(title: str, entries: Sequence[str], style: str) -> List[StyledLine]:
    if not entries:
        return []
    lines: List[StyledLine] = [(title, f"bold {style}")]
    lines.extend((f"  {entry}", style) for entry in entries)
    return lines


def summary_lines(result: RunResult) -> List[StyledLine]:
    """Return the summary as ``(text, style)`` pairs in display order."""

    lines: List[StyledLine] = [(HEADER, _BANNER_STYLE)]
    if result.dry_run:
        lines.append((DRY_RUN_BANNER, _BANNER_STYLE))

    lines.extend(_section("Changed files:", result.changed_files, "green"))
    lines.extend(_section("Updated properties:", result.changed_properties, "green"))
    lines.extend(_section("Updated JSON fields:", result.changed_json, "green"))
    lines.extend(_section("String replacements:", result.replacements, "yellow"))
    lines.extend(_section("Warnings/Errors:", result.errors, "red"))

    if result.is_empty:
        lines.append((UP_TO_DATE, _BANNER_STYLE))
    lines.append((FOOTER, _BANNER_STYLE))
    return lines


def render_summary(result: RunResult) -> str:
    """Return the summary as plain text."""

    return "\n".join(text for text, _style in summary_lines(result))


def print_summary(result: RunResult, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print()
    for text, style in summary_lines(result):
        console.print(Text(text, style=style), soft_wrap=True)


__all__ = ["print_summary", "render_summary", "summary_lines"]
