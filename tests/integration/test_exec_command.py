"""CLI tests for `exec` and `applets` with faked process replacement."""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Mapping

import pytest
from typer.testing import CliRunner

from execable.cli import app


class ProcessReplaced(Exception):
    """Raised by fake primitives to stand in for a successful exec."""


class FakeExec:
    """Fake `os.execve`/`os.execvpe` recording calls with configurable failures."""

    def __init__(self, execve_errno: int | None = None, execvpe_errno: int | None = None) -> None:
        """Configure failure codes; `None` simulates a successful replacement."""

        self.execve_errno = execve_errno
        self.execvpe_errno = execvpe_errno
        self.execve_calls: list[tuple[str, list[str]]] = []
        self.execvpe_calls: list[tuple[str, list[str]]] = []

    def execve(self, path: str, argv: list[str], env: Mapping[str, str]) -> None:
        """Record an image exec."""

        del env
        self.execve_calls.append((path, argv))
        if self.execve_errno is None:
            raise ProcessReplaced(path)
        raise OSError(self.execve_errno, os.strerror(self.execve_errno), path)

    def execvpe(self, file: str, argv: list[str], env: Mapping[str, str]) -> None:
        """Record a path-searching exec."""

        del env
        self.execvpe_calls.append((file, argv))
        if self.execvpe_errno is None:
            raise ProcessReplaced(file)
        raise OSError(self.execvpe_errno, os.strerror(self.execvpe_errno), file)


@pytest.fixture
def fake_exec(monkeypatch: pytest.MonkeyPatch) -> FakeExec:
    """Install fake exec primitives and a clean `EXECABLE_*` environment."""

    fake = FakeExec()
    monkeypatch.setattr(os, "execve", fake.execve)
    monkeypatch.setattr(os, "execvpe", fake.execvpe)
    for name in ("EXECABLE_PREFER_APPLETS", "EXECABLE_EXEC_PATHS", "EXECABLE_APPLETS"):
        monkeypatch.delenv(name, raising=False)
    return fake


def _write_config(tmp_path: Path, body: str) -> Path:
    """Write a YAML config file for one test."""

    config_path = tmp_path / "execable.yml"
    config_path.write_text(body, encoding="utf-8")
    return config_path


def test_exec_falls_back_to_path_search_for_unknown_name(fake_exec: FakeExec) -> None:
    """Unknown names should reach the path search with argv passed through."""

    result = CliRunner().invoke(app, ["exec", "grep", "-n", "--color", "x"])

    assert isinstance(result.exception, ProcessReplaced)
    assert fake_exec.execve_calls == []
    assert fake_exec.execvpe_calls == [("grep", ["grep", "-n", "--color", "x"])]


def test_exec_prefers_configured_applet_image(fake_exec: FakeExec, tmp_path: Path) -> None:
    """Registered applets should exec the configured self image first."""

    config_path = _write_config(tmp_path, "applets: [ls]\nexec_paths: [/opt/box/bin/box]\n")

    result = CliRunner().invoke(app, ["exec", "--config", str(config_path), "ls", "-l"])

    assert isinstance(result.exception, ProcessReplaced)
    assert fake_exec.execve_calls == [("/opt/box/bin/box", ["ls", "-l"])]
    assert fake_exec.execvpe_calls == []


def test_exec_reports_missing_command_with_127(fake_exec: FakeExec) -> None:
    """A fallback `ENOENT` should map to the shell's not-found status."""

    fake_exec.execvpe_errno = errno.ENOENT

    result = CliRunner().invoke(app, ["exec", "no-such-tool"])

    assert result.exit_code == 127
    assert "exec failed at stage `exec`: Command not found: `no-such-tool`. (ENOENT)" in (
        result.output
    )


def test_exec_applet_image_failure_is_terminal_with_126(
    fake_exec: FakeExec, tmp_path: Path
) -> None:
    """Failed applet images must not fall back to the path search."""

    fake_exec.execve_errno = errno.EACCES
    config_path = _write_config(tmp_path, "applets: [ls]\nexec_paths: [/opt/box/bin/box]\n")

    result = CliRunner().invoke(app, ["exec", "--config", str(config_path), "ls"])

    assert result.exit_code == 126
    assert "exec failed at stage `applet`" in result.output
    assert "(EACCES)" in result.output
    assert fake_exec.execvpe_calls == []


def test_exec_no_applets_skips_registry(fake_exec: FakeExec, tmp_path: Path) -> None:
    """`--no-applets` should use the path search even for registered names."""

    config_path = _write_config(tmp_path, "applets: [ls]\n")

    result = CliRunner().invoke(
        app, ["exec", "--config", str(config_path), "--no-applets", "ls"]
    )

    assert isinstance(result.exception, ProcessReplaced)
    assert fake_exec.execve_calls == []
    assert fake_exec.execvpe_calls == [("ls", ["ls"])]


def test_exec_verbose_logs_launch_events(fake_exec: FakeExec) -> None:
    """`--verbose` should print deterministic event lines."""

    fake_exec.execvpe_errno = errno.ENOENT

    result = CliRunner().invoke(app, ["exec", "--verbose", "grep"])

    assert result.exit_code == 127
    assert "[exec] level=DEBUG stage=applet event=miss name=grep" in result.output
    assert "[exec] level=DEBUG stage=exec event=fallback name=grep" in result.output


def test_exec_argv_growth_limit_reports_argv_stage(
    fake_exec: FakeExec, tmp_path: Path
) -> None:
    """Configured argv limits should fail before any exec is attempted."""

    config_path = _write_config(
        tmp_path, "initial_argv_capacity: 2\nmax_argv_capacity: 4\n"
    )

    result = CliRunner().invoke(
        app, ["exec", "--config", str(config_path), "echo", "a", "b", "c", "d"]
    )

    assert result.exit_code == 126
    assert "exec failed at stage `argv`" in result.output
    assert fake_exec.execvpe_calls == []


def test_exec_reports_missing_config_file(fake_exec: FakeExec) -> None:
    """A missing `--config` path should fail at the config stage."""

    result = CliRunner().invoke(app, ["exec", "--config", "missing-execable.yaml", "ls"])

    assert result.exit_code == 1
    assert "exec failed at stage `config`" in result.output
    assert "Config file not found: `missing-execable.yaml`." in result.output
    assert fake_exec.execvpe_calls == []


def test_applets_lists_configured_names(fake_exec: FakeExec, tmp_path: Path) -> None:
    """`applets` should list registry names in lookup order."""

    del fake_exec
    config_path = _write_config(tmp_path, "applets: [sh, cat, ls]\n")

    result = CliRunner().invoke(app, ["applets", "--config", str(config_path)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["cat", "ls", "sh"]


def test_applets_reads_environment_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without `--config`, applets come from `EXECABLE_APPLETS`."""

    monkeypatch.setenv("EXECABLE_APPLETS", "echo")

    result = CliRunner().invoke(app, ["applets"])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["echo"]
