from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from mule_lazy_migrate import commands


def test_run_command_reports_success(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, Any] = {}

    def fake_run(command: list[str], **kwargs: Any) -> SimpleNamespace:
        captured["command"] = command
        captured.update(kwargs)
        return SimpleNamespace(returncode=0, stdout="BUILD SUCCESS\n", stderr="")

    monkeypatch.setattr(commands.subprocess, "run", fake_run)

    outcome = commands.run_command(["mvn", "clean", "install"], tmp_path)

    assert outcome.success is True
    assert outcome.output == "BUILD SUCCESS\n"
    assert outcome.description == "mvn clean install"
    assert captured["command"] == ["mvn", "clean", "install"]
    assert captured["cwd"] == tmp_path
    assert captured["check"] is False
    assert captured["capture_output"] is True


def test_run_command_reports_non_zero_exit(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        commands.subprocess,
        "run",
        lambda command, **kwargs: SimpleNamespace(returncode=1, stdout="", stderr="BUILD FAILURE"),
    )

    outcome = commands.run_command(["mvn", "clean", "install"], tmp_path)

    assert outcome.success is False
    assert "BUILD FAILURE" in outcome.output


def test_run_command_handles_missing_executable(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def fake_run(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise FileNotFoundError("mvn")

    monkeypatch.setattr(commands.subprocess, "run", fake_run)

    outcome = commands.run_command(["mvn", "-v"], tmp_path)

    assert outcome.success is False
    assert "mvn" in outcome.output


def test_update_maven_dependencies_removes_versions_backup(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    recorded: list[list[str]] = []

    def fake_run_command(command: list[str], cwd: Path) -> commands.CommandOutcome:
        recorded.append(list(command))
        (cwd / commands.VERSIONS_BACKUP_FILE).write_text("<project/>", encoding="utf-8")
        return commands.CommandOutcome(success=True, description=" ".join(command))

    monkeypatch.setattr(commands, "run_command", fake_run_command)

    outcome = commands.update_maven_dependencies(tmp_path)

    assert outcome.success is True
    assert recorded == [["mvn", "versions:use-latest-releases"]]
    assert not (tmp_path / commands.VERSIONS_BACKUP_FILE).exists()


def test_build_mule_project_runs_clean_install(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    recorded: list[list[str]] = []

    def fake_run_command(command: list[str], cwd: Path) -> commands.CommandOutcome:
        recorded.append(list(command))
        return commands.CommandOutcome(success=False)

    monkeypatch.setattr(commands, "run_command", fake_run_command)

    outcome = commands.build_mule_project(tmp_path)

    assert outcome.success is False
    assert recorded == [["mvn", "clean", "install"]]


def test_run_command_logs_output_of_failed_command(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(
        commands.subprocess,
        "run",
        lambda command, **kwargs: SimpleNamespace(
            returncode=1, stdout="[INFO] Scanning\n", stderr="[ERROR] BUILD FAILURE\n"
        ),
    )

    with caplog.at_level(logging.ERROR, logger="mule_lazy_migrate.commands"):
        commands.run_command(["mvn", "clean", "install"], tmp_path)

    assert "[INFO] Scanning" in caplog.text
    assert "[ERROR] BUILD FAILURE" in caplog.text


def test_run_command_logs_output_of_successful_command_at_debug(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(
        commands.subprocess,
        "run",
        lambda command, **kwargs: SimpleNamespace(returncode=0, stdout="BUILD SUCCESS\n", stderr=""),
    )

    with caplog.at_level(logging.INFO, logger="mule_lazy_migrate.commands"):
        commands.run_command(["mvn", "clean", "install"], tmp_path)
    assert "BUILD SUCCESS" not in caplog.text

    with caplog.at_level(logging.DEBUG, logger="mule_lazy_migrate.commands"):
        commands.run_command(["mvn", "clean", "install"], tmp_path)
    assert "BUILD SUCCESS" in caplog.text
