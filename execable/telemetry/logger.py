"""Structured launch event logging.

Responsibilities:
- Emit concise, deterministic one-line events for resolution and launch steps.
- Route events through `loguru` to a caller-chosen sink (stderr for the CLI).
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger

_CHANNEL = "execable"


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class ExecLogger:
    """Emit deterministic launch events for CLI-observable exec activity."""

    def __init__(self, sink: TextIO | None = None, level: str = "DEBUG") -> None:
        """Add a loguru handler that only receives events from this channel.

        Handlers installed elsewhere are left in place.
        """

        self._sink = sink or sys.stderr
        self._logger = _loguru_logger.bind(channel=_CHANNEL)
        self._handler_id = _loguru_logger.add(
            self._sink,
            format="{message}",
            level=level,
            colorize=False,
            filter=lambda record: record["extra"].get("channel") == _CHANNEL,
        )

    def close(self) -> None:
        """Detach the loguru handler installed by this logger."""

        _loguru_logger.remove(self._handler_id)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured event line."""

        line = f"[exec] level={level} stage={stage} event={event}{_format_context(context)}"
        self._logger.log(level, line)

    def applet_attempt(self, name: str, image_path: str) -> None:
        """Record an attempt to run `name` through one self-image path."""

        self._emit("DEBUG", "attempt", "applet", name=name, image=image_path)

    def applet_miss(self, name: str) -> None:
        """Record a registry miss for `name`."""

        self._emit("DEBUG", "miss", "applet", name=name)

    def image_failed(self, name: str, image_path: str, errno_name: str) -> None:
        """Record one failed self-image exec without aborting the applet phase."""

        self._emit(
            "WARNING",
            "image_failed",
            "applet",
            name=name,
            image=image_path,
            errno=errno_name,
        )

    def fallback(self, name: str) -> None:
        """Record the switch to the path-searching exec primitive."""

        self._emit("DEBUG", "fallback", "exec", name=name)

    def launch_failure(self, stage: str, name: str, errno_name: str) -> None:
        """Record a terminal launch failure without argument payload details."""

        self._emit("ERROR", "failure", stage, name=name, errno=errno_name)
