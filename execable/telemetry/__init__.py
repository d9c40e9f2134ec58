"""Telemetry helpers.

This package emits deterministic launch events for diagnostics.
"""

from .logger import ExecLogger

__all__ = ["ExecLogger"]
