"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
resolved paths, and applet listings.
"""

from __future__ import annotations

from typing import Iterable, NoReturn

import typer

from .errors import ArgumentVectorError, CommandNotFoundError, ExecableError, LaunchFailedError

EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


def exit_code_for(exc: Exception) -> int:
    """Return the shell-style exit status for a command failure."""

    if isinstance(exc, CommandNotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(exc, (LaunchFailedError, ArgumentVectorError)):
        return EXIT_NOT_EXECUTABLE
    return 1


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit."""

    if isinstance(exc, ExecableError):
        message = f"{command_name} failed at stage `{exc.stage}`: {exc.detail}"
        if exc.errno_code is not None:
            message = f"{message} ({exc.errno_name})"
        typer.secho(message, fg=typer.colors.RED, err=True)
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=exit_code_for(exc)) from exc


def echo_resolved_paths(paths: Iterable[str]) -> None:
    """Print one resolved executable path per line."""

    for path in paths:
        typer.echo(path)


def echo_applet_list(names: Iterable[str]) -> None:
    """Print registered applet names, one per line, in lookup order."""

    for name in names:
        typer.echo(name)
