"""Command-line interface for execable.

Responsibilities:
- Expose `PATH` lookups (`which`, `exists`) over the search-path resolver.
- Launch programs through the applet-preferring launcher (`exec`).
- Convert CLI options into `ExecableConfig` and render failures.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger as loguru_logger

from . import __version__
from .argv import build_argv_and_launch
from .cli_rendering import echo_applet_list, echo_resolved_paths, exit_with_command_error
from .config import ConfigLoader, ExecableConfig
from .errors import ExecableError
from .resolver import is_executable_regular_file, iter_executables, path_contains_executable
from .telemetry.logger import ExecLogger

app = typer.Typer(
    name="execable",
    no_args_is_help=True,
    help="Executable resolution and applet-preferring launch.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Optional YAML config path."),
]
SearchPathOption = Annotated[
    str | None,
    typer.Option("--path", help="Search path to use instead of `$PATH`."),
]


def _load_config(config_path: Path | None) -> ExecableConfig:
    """Load YAML config when requested, else environment config; map failures."""

    if config_path is None:
        try:
            return ConfigLoader.from_env()
        except ValueError as exc:
            raise ExecableError(
                stage="config",
                detail=f"Invalid environment configuration: {exc}",
                hint="Fix the `EXECABLE_*` environment variables and rerun.",
            ) from exc

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise ExecableError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise ExecableError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except OSError as exc:
        raise ExecableError(
            stage="config",
            detail=f"Failed to read config file `{config_path}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def _effective_search_path(search_path: str | None) -> str | None:
    """Return the search path override, else `$PATH`; unset means nothing is searched."""

    if search_path is not None:
        return search_path
    return os.environ.get("PATH")


def _resolve_name(name: str, search_path: str | None, all_matches: bool) -> list[str]:
    """Resolve one command name; names with a `/` are checked as-is."""

    if "/" in name:
        return [name] if is_executable_regular_file(name) else []
    matches = iter_executables(name, search_path)
    if all_matches:
        return list(matches)
    first = next(matches, None)
    return [] if first is None else [first]


@app.command("which")
def which_command(
    names: Annotated[list[str], typer.Argument(help="Program names to locate.")],
    all_matches: Annotated[
        bool,
        typer.Option("--all", "-a", help="Print every match, not just the first."),
    ] = False,
    search_path: SearchPathOption = None,
) -> None:
    """Print the full path of each program found on the search path."""

    effective_path = _effective_search_path(search_path)
    missing = False
    for name in names:
        matches = _resolve_name(name, effective_path, all_matches)
        if not matches:
            missing = True
            continue
        echo_resolved_paths(matches)
    if missing:
        raise typer.Exit(code=1)


@app.command("exists")
def exists_command(
    name: Annotated[str, typer.Argument(help="Program name to look up.")],
    search_path: SearchPathOption = None,
) -> None:
    """Exit with status 0 when the program is on the search path, 1 otherwise."""

    env = os.environ if search_path is None else {"PATH": search_path}
    if not path_contains_executable(name, env):
        raise typer.Exit(code=1)


@app.command(
    "exec",
    context_settings={"allow_interspersed_args": False, "ignore_unknown_options": True},
)
def exec_command(
    name: Annotated[str, typer.Argument(help="Program or applet name to launch.")],
    args: Annotated[
        list[str] | None,
        typer.Argument(help="Arguments passed to the program."),
    ] = None,
    config_file: ConfigOption = None,
    no_applets: Annotated[
        bool,
        typer.Option("--no-applets", help="Skip the applet phase and search `PATH` only."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log launch events to stderr."),
    ] = False,
) -> None:
    """Replace this process with NAME, preferring a built-in applet."""

    logger: ExecLogger | None = None
    try:
        config = _load_config(config_file)
        if no_applets:
            config.prefer_applets = False
        if verbose:
            logger = ExecLogger()
        launcher = config.build_launcher(logger=logger)
        build_argv_and_launch(
            name,
            *(args or []),
            None,
            launcher=launcher,
            initial_capacity=config.initial_argv_capacity,
            max_capacity=config.max_argv_capacity,
        )
    except (ExecableError, ValueError) as exc:
        exit_with_command_error("exec", exc)
    finally:
        if logger is not None:
            logger.close()


@app.command("applets")
def applets_command(config_file: ConfigOption = None) -> None:
    """List the configured applet names."""

    try:
        config = _load_config(config_file)
    except ExecableError as exc:
        exit_with_command_error("applets", exc)
    names = config.build_registry().names()
    if not names:
        typer.echo("No applets configured.")
        return
    echo_applet_list(names)


@app.command("version")
def version_command() -> None:
    """Print the installed execable version."""

    typer.echo(__version__)


def main() -> None:
    """Run the execable CLI.

    loguru's default stderr handler is dropped so `--verbose` events are
    printed once, by `ExecLogger`, in its own format.
    """

    loguru_logger.remove()
    app()
