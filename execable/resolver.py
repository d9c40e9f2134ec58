"""Search-path executable resolution.

Responsibilities:
- Decide whether a path names a regular file executable by the current user.
- Walk a colon-separated search path one segment at a time with resumable state.
- Answer "is this program on `PATH`" without touching the process environment.

Key types:
- `PathCursor`: owned, already-split search path plus the resume offset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
import stat
from typing import Iterator, Mapping

_PATH_SEPARATOR = ":"


def is_executable_regular_file(path: str | os.PathLike[str]) -> bool:
    """Return whether `path` is a regular file the current user may execute.

    Missing paths, permission failures, paths the OS cannot represent and
    non-regular targets (directories, devices, symlinks to either) all report
    `False`.
    """

    try:
        if not os.access(path, os.X_OK):
            return False
        mode = os.stat(path).st_mode
    except (OSError, ValueError):
        # embedded NUL, overlong or undecodable path
        return False
    return stat.S_ISREG(mode)


@dataclass(slots=True)
class PathCursor:
    """Remaining unsearched portion of a search path.

    Attributes:
        segments: Search path split on `:`; empty entries are kept and skipped.
        position: Index of the next segment to examine.
    """

    segments: list[str] = field(default_factory=list)
    position: int = 0

    @classmethod
    def from_path(cls, search_path: str | None) -> PathCursor:
        """Create a cursor over a raw colon-separated search path."""

        if search_path is None:
            return cls()
        return cls(segments=search_path.split(_PATH_SEPARATOR))

    @property
    def exhausted(self) -> bool:
        """Return `True` once every segment has been consumed."""

        return self.position >= len(self.segments)

    def remaining(self) -> str | None:
        """Return the unsearched part of the path, or `None` when exhausted."""

        if self.exhausted:
            return None
        return _PATH_SEPARATOR.join(self.segments[self.position :])

    def take(self) -> str | None:
        """Consume and return the next segment, or `None` when exhausted."""

        if self.exhausted:
            return None
        segment = self.segments[self.position]
        self.position += 1
        return segment


def _join_candidate(directory: str, filename: str) -> str:
    """Join one search directory and a filename with exactly one `/` between."""

    return f"{directory.rstrip('/')}/{filename.lstrip('/')}"


def find_executable(filename: str, cursor: PathCursor) -> str | None:
    """Find the next executable `filename` along `cursor`.

    On success the cursor is left just past the matching segment, so calling
    again continues the search. On failure the cursor is exhausted.
    """

    while not cursor.exhausted:
        segment = cursor.take()
        if not segment:
            # "foo::bar"
            continue
        candidate = _join_candidate(segment, filename)
        if is_executable_regular_file(candidate):
            return candidate
    return None


def iter_executables(filename: str, search_path: str | None) -> Iterator[str]:
    """Yield every executable `filename` along `search_path`, in order."""

    cursor = PathCursor.from_path(search_path)
    while True:
        found = find_executable(filename, cursor)
        if found is None:
            return
        yield found


def path_contains_executable(
    filename: str, env: Mapping[str, str] | None = None
) -> bool:
    """Return whether `filename` resolves to an executable on `PATH`.

    Args:
        filename: Bare program name.
        env: Environment mapping to read `PATH` from; defaults to `os.environ`.
    """

    source = os.environ if env is None else env
    cursor = PathCursor.from_path(source.get("PATH"))
    return find_executable(filename, cursor) is not None
