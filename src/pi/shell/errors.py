"""Exceptions raised by the shell.

Decode anomalies are not exceptions: the key decoder reports them as
``unknown`` events and the editor ignores them.
"""

from __future__ import annotations


class ShellError(Exception):
    """Base class for shell errors."""


class ReadFailure(ShellError):
    """The input byte stream failed or was closed. Fatal to the editor loop."""


class ModeFailure(ShellError):
    """Raw mode could not be acquired or restored."""


class ExecutionFailure(ShellError):
    """A command could not be run or exited with a non-zero status.

    Reported to the user; editing continues.
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class BufferFull(ShellError):
    """The line buffer reached its configured length cap."""
