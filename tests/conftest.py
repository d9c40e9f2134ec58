"""Shared pytest fixtures for the full execable test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

MakeExecutable = Callable[..., Path]


@pytest.fixture
def make_executable(tmp_path: Path) -> MakeExecutable:
    """Return a factory that writes a script under `tmp_path/<directory>/<name>`."""

    def _make(directory: str, name: str, mode: int = 0o755) -> Path:
        """Create one script file with the given permission bits."""

        target_dir = tmp_path / directory
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / name
        target.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        target.chmod(mode)
        return target

    return _make
