"""Module entrypoint for running execable as ``python -m execable``."""

from __future__ import annotations

from execable.cli import main


if __name__ == "__main__":
    main()
