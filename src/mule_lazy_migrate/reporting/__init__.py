"""Reporting adapters for migration results."""

from .json import render_json, result_payload, write_json
from .summary import print_summary, render_summary, summary_lines

__all__ = [
    "print_summary",
    "render_json",
    "render_summary",
    "result_payload",
    "summary_lines",
    "write_json",
]
