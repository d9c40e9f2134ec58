"""Applet-preferring process launch.

Responsibilities:
- Try a registered applet name through each configured self-image path.
- Fall back to the path-searching exec primitive only on an applet registry miss.
- Map returned exec calls to typed errors that keep the OS errno.

Key types:
- `ExecRequest`: immutable `(file, argv, env)` handed to the exec primitives.
- `AppletLauncher`: launcher wired to a registry, image paths and primitives.
"""

from __future__ import annotations

from dataclasses import dataclass
import errno
import os
from typing import Callable, Mapping, NoReturn, Sequence

from .applets import AppletRegistry
from .errors import (
    AppletNotFoundError,
    ArgumentVectorError,
    CommandNotFoundError,
    ExecableError,
    LaunchFailedError,
    errno_name,
)
from .telemetry.logger import ExecLogger

ExecveFunc = Callable[[str, list[str], Mapping[str, str]], object]
ExecvpeFunc = Callable[[str, list[str], Mapping[str, str]], object]


@dataclass(frozen=True, slots=True)
class ExecRequest:
    """One process replacement request.

    Attributes:
        file: Requested program name or path.
        argv: Argument vector, `argv[0]` included.
        env: Environment for the new process image.
    """

    file: str
    argv: tuple[str, ...]
    env: Mapping[str, str]

    def __post_init__(self) -> None:
        if not self.argv:
            raise ArgumentVectorError(
                f"Argument vector for `{self.file}` must not be empty.",
                hint="Pass the program name as the first argument.",
            )
        for item in self.argv:
            if not isinstance(item, str):
                raise ArgumentVectorError(
                    f"Argument vector for `{self.file}` contains non-string item {item!r}."
                )


def _launch_error(name: str, stage: str, errno_code: int | None) -> ExecableError:
    """Classify a returned exec call by its errno."""

    if errno_code == errno.ENOENT:
        return CommandNotFoundError(name, stage=stage)
    return LaunchFailedError(name, stage=stage, errno_code=errno_code)


class AppletLauncher:
    """Launch programs, preferring built-in applets over a path search."""

    def __init__(
        self,
        registry: AppletRegistry,
        exec_paths: Sequence[str] = (),
        *,
        prefer_applets: bool = True,
        execve: ExecveFunc | None = None,
        execvpe: ExecvpeFunc | None = None,
        logger: ExecLogger | None = None,
    ) -> None:
        self._registry = registry
        self._exec_paths = tuple(exec_paths)
        self._prefer_applets = prefer_applets
        self._execve = execve if execve is not None else os.execve
        self._execvpe = execvpe if execvpe is not None else os.execvpe
        self._logger = logger

    @property
    def exec_paths(self) -> tuple[str, ...]:
        """Return self-image paths tried for applets, in order."""

        return self._exec_paths

    @property
    def prefer_applets(self) -> bool:
        """Return whether the applet phase runs before the path search."""

        return self._prefer_applets

    def exec_applet(self, request: ExecRequest) -> NoReturn:
        """Replace the process with an applet image for `request.file`.

        Raises:
            AppletNotFoundError: The name is not registered. Nothing on disk is touched.
            CommandNotFoundError: No image path could be attempted, or the last one
                does not exist.
            LaunchFailedError: Every image path failed for another reason.
        """

        name = request.file
        if self._registry.lookup(name) is None:
            if self._logger is not None:
                self._logger.applet_miss(name)
            raise AppletNotFoundError(name)

        last_errno: int | None = errno.ENOENT
        for image_path in self._exec_paths:
            if self._logger is not None:
                self._logger.applet_attempt(name, image_path)
            try:
                self._execve(image_path, list(request.argv), request.env)
            except OSError as exc:
                last_errno = exc.errno
            else:
                last_errno = None
            if self._logger is not None:
                self._logger.image_failed(name, image_path, errno_name(last_errno))

        error = _launch_error(name, "applet", last_errno)
        if not self._exec_paths:
            error.hint = "No self-image paths are configured for applets."
        if self._logger is not None:
            self._logger.launch_failure("applet", name, error.errno_name)
        raise error

    def launch_preferring_applet(
        self, file: str, argv: Sequence[str], env: Mapping[str, str]
    ) -> NoReturn:
        """Run `file` as an applet if registered, else search `PATH` for it.

        Only an applet registry miss falls through to the path search. A
        registered applet whose images all fail is reported as-is.
        """

        request = ExecRequest(file=file, argv=tuple(argv), env=env)
        if self._prefer_applets:
            try:
                self.exec_applet(request)
            except AppletNotFoundError:
                if self._logger is not None:
                    self._logger.fallback(file)
        self._exec_fallback(request)

    def launch_preferring_applet_default_env(
        self, file: str, argv: Sequence[str]
    ) -> NoReturn:
        """Same as `launch_preferring_applet` with the current process environment."""

        self.launch_preferring_applet(file, argv, os.environ)

    def _exec_fallback(self, request: ExecRequest) -> NoReturn:
        """Hand `request` to the path-searching exec primitive."""

        try:
            self._execvpe(request.file, list(request.argv), request.env)
        except OSError as exc:
            error = _launch_error(request.file, "exec", exc.errno)
            if self._logger is not None:
                self._logger.launch_failure("exec", request.file, error.errno_name)
            raise error from exc
        raise LaunchFailedError(request.file, stage="exec", errno_code=None)
