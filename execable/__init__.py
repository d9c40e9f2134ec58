"""Top-level package for execable.

This package resolves executables along a colon-separated search path and
launches programs with a preference for built-in applets. The main entry
points are `find_executable` and `AppletLauncher`.
"""

from .argv import ArgumentVector, build_argv_and_launch
from .launcher import AppletLauncher, ExecRequest
from .resolver import (
    PathCursor,
    find_executable,
    is_executable_regular_file,
    iter_executables,
    path_contains_executable,
)

__all__ = [
    "AppletLauncher",
    "ArgumentVector",
    "ExecRequest",
    "PathCursor",
    "__version__",
    "build_argv_and_launch",
    "find_executable",
    "is_executable_regular_file",
    "iter_executables",
    "path_contains_executable",
]

__version__ = "0.1.0"
