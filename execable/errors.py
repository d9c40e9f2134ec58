"""Domain exceptions for executable resolution and launch diagnostics."""

from __future__ import annotations

import errno
import os


def errno_name(errno_code: int | None) -> str:
    """Return the symbolic name for an OS error code (`ENOENT`), or `none`."""

    if errno_code is None:
        return "none"
    return errno.errorcode.get(errno_code, str(errno_code))


class ExecableError(RuntimeError):
    """Raised when a resolution or launch stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        errno_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped error with an optional OS error code."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.errno_code = errno_code
        self.hint = hint

    @property
    def errno_name(self) -> str:
        """Return the symbolic errno name, or `none` when no code is attached."""

        return errno_name(self.errno_code)


class CommandNotFoundError(ExecableError):
    """Raised when no executable could be located for a command name."""

    def __init__(self, name: str, *, stage: str = "resolve", hint: str | None = None) -> None:
        super().__init__(
            stage=stage,
            detail=f"Command not found: `{name}`.",
            errno_code=errno.ENOENT,
            hint=hint,
        )
        self.name = name


class AppletNotFoundError(CommandNotFoundError):
    """Raised when a name is not registered as an applet.

    This is the only failure that lets the launcher fall back to an ordinary
    path search.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name, stage="applet")
        self.detail = f"No applet named `{name}`."
        self.args = (self.detail,)


class LaunchFailedError(ExecableError):
    """Raised when process replacement returned control to the caller."""

    def __init__(
        self,
        name: str,
        *,
        stage: str,
        errno_code: int | None,
        hint: str | None = None,
    ) -> None:
        reason = os.strerror(errno_code) if errno_code is not None else "exec returned"
        super().__init__(
            stage=stage,
            detail=f"Failed to launch `{name}`: {reason}.",
            errno_code=errno_code,
            hint=hint,
        )
        self.name = name


class ArgumentVectorError(ExecableError):
    """Raised when an argument vector cannot be assembled."""

    def __init__(
        self, detail: str, *, errno_code: int | None = None, hint: str | None = None
    ) -> None:
        super().__init__(stage="argv", detail=detail, errno_code=errno_code, hint=hint)
