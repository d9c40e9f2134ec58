"""Sentinel-terminated argument vector assembly for `execlp`-style launches."""

from __future__ import annotations

import errno
from typing import Iterator, NoReturn

from .errors import ArgumentVectorError
from .launcher import AppletLauncher

INITIAL_ARGV_CAPACITY = 16


class ArgumentVector:
    """Growable argument list with doubling capacity.

    The vector is finalized by appending `None`; once finalized no further
    items are accepted.
    """

    def __init__(
        self,
        initial_capacity: int = INITIAL_ARGV_CAPACITY,
        max_capacity: int | None = None,
    ) -> None:
        if initial_capacity <= 0:
            raise ValueError("`initial_capacity` must be a positive integer.")
        if max_capacity is not None and max_capacity < initial_capacity:
            raise ValueError("`max_capacity` must not be below `initial_capacity`.")
        self._items: list[str | None] = []
        self._capacity = initial_capacity
        self._max_capacity = max_capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def terminated(self) -> bool:
        return bool(self._items) and self._items[-1] is None

    def __len__(self) -> int:
        """Return the number of arguments, excluding the terminator."""

        return len(self._items) - 1 if self.terminated else len(self._items)

    def __iter__(self) -> Iterator[str]:
        for item in self._items:
            if item is not None:
                yield item

    def append(self, item: str | None) -> None:
        """Append one argument, or the `None` terminator."""

        if self.terminated:
            raise ArgumentVectorError("Argument vector is already terminated.")
        if item is not None and not isinstance(item, str):
            raise ArgumentVectorError(f"Argument {item!r} is not a string.")
        if len(self._items) == self._capacity:
            self._grow()
        try:
            self._items.append(item)
        except MemoryError as exc:
            raise ArgumentVectorError(
                f"Out of memory growing argument vector to {self._capacity} entries.",
                errno_code=errno.ENOMEM,
            ) from exc

    def null_terminated(self) -> tuple[str | None, ...]:
        """Return the finalized view, trailing `None` included."""

        if not self.terminated:
            raise ArgumentVectorError(
                "Argument vector is missing its `None` terminator.",
                hint="End the argument list with `None`.",
            )
        return tuple(self._items)

    def as_exec_args(self) -> list[str]:
        """Return the arguments in the form the `os.exec*` family expects."""

        return [item for item in self.null_terminated() if item is not None]

    def _grow(self) -> None:
        new_capacity = self._capacity * 2
        if self._max_capacity is not None and new_capacity > self._max_capacity:
            raise ArgumentVectorError(
                f"Argument vector cannot grow beyond {self._max_capacity} entries.",
                errno_code=errno.ENOMEM,
            )
        self._capacity = new_capacity


def build_argv(
    first_arg: str,
    *rest: str | None,
    initial_capacity: int = INITIAL_ARGV_CAPACITY,
    max_capacity: int | None = None,
) -> ArgumentVector:
    """Collect `first_arg` and `rest` up to and including the `None` sentinel."""

    vector = ArgumentVector(initial_capacity=initial_capacity, max_capacity=max_capacity)
    vector.append(first_arg)
    for item in rest:
        if vector.terminated:
            break
        vector.append(item)
    if not vector.terminated:
        raise ArgumentVectorError(
            "Argument list is not terminated by `None`.",
            hint="Pass `None` as the last argument.",
        )
    return vector


def build_argv_and_launch(
    file: str,
    first_arg: str | None,
    *rest: str | None,
    launcher: AppletLauncher,
    initial_capacity: int = INITIAL_ARGV_CAPACITY,
    max_capacity: int | None = None,
) -> NoReturn:
    """Launch `file` with argv `[file, first_arg, *rest]` up to the `None` sentinel.

    `build_argv_and_launch("ls", "-l", "/tmp", None)` launches `ls` with
    `["ls", "-l", "/tmp"]`. Vector construction failures raise
    `ArgumentVectorError` before any launch is attempted.
    """

    vector = build_argv(
        file,
        first_arg,
        *rest,
        initial_capacity=initial_capacity,
        max_capacity=max_capacity,
    )
    launcher.launch_preferring_applet_default_env(file, vector.as_exec_args())
