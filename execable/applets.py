"""Applet registry used by the applet-preferring launcher."""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, Protocol


class AppletRegistry(Protocol):
    """Name lookup for built-in applets."""

    def lookup(self, name: str) -> int | None:
        """Return the applet index for `name`, or `None` when unknown."""


class StaticAppletRegistry:
    """Sorted, immutable applet table searched by bisection."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names = tuple(sorted({name.strip() for name in names if name.strip()}))

    def lookup(self, name: str) -> int | None:
        """Return the index of `name` in the sorted table, or `None`."""

        index = bisect_left(self._names, name)
        if index < len(self._names) and self._names[index] == name:
            return index
        return None

    def names(self) -> tuple[str, ...]:
        """Return registered applet names in lookup order."""

        return self._names

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None
