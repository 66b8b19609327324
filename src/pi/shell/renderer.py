"""Redraws the prompt and the edited line on the terminal."""

from __future__ import annotations

from typing import Protocol

_CLEAR_LINE = "\r\x1b[2K"
_NEWLINE = "\r\n"
_BELL = "\a"


class Writer(Protocol):
    def write(self, data: str) -> None: ...


class LineRenderer:
    """Erases the current terminal line and redraws prompt plus content.

    The terminal cursor is always left at the end of the content.
    """

    def __init__(self, out: Writer) -> None:
        self._out = out
        self.last_drawn: str | None = None

    def draw(self, prompt: str, line: bytes) -> None:
        text = prompt + line.decode("ascii", errors="replace")
        self._out.write(_CLEAR_LINE + text)
        self.last_drawn = text

    def newline(self) -> None:
        self._out.write(_NEWLINE)
        self.last_drawn = None

    def bell(self) -> None:
        self._out.write(_BELL)
