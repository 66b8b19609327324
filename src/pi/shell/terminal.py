"""Terminal abstraction for raw-mode byte input.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` that
reads single bytes from a file descriptor and manages raw mode via
:mod:`termios` and :mod:`tty`. :func:`raw_mode` pairs acquisition and
restoration so the host terminal is never left in raw mode.
"""

from __future__ import annotations

import logging
import os
import sys
import termios
import tty
from contextlib import contextmanager
from typing import Any, ContextManager, Iterator, Protocol

from pi.shell.errors import ModeFailure, ReadFailure

logger = logging.getLogger(__name__)

ModeHandle = Any


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the terminal the editor runs on."""

    def acquire_raw_mode(self) -> ModeHandle: ...

    def restore_mode(self, handle: ModeHandle) -> None: ...

    def cooked(self) -> ContextManager[None]: ...

    def read_byte(self) -> int: ...

    def write(self, data: str) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by the process's stdin/stdout file descriptors."""

    def __init__(self, fd_in: int | None = None, fd_out: int | None = None) -> None:
        self._fd_in = sys.stdin.fileno() if fd_in is None else fd_in
        self._fd_out = sys.stdout.fileno() if fd_out is None else fd_out
        self._saved_termios: list | None = None

    @property
    def is_raw(self) -> bool:
        return self._saved_termios is not None

    # -- mode control -------------------------------------------------------

    def acquire_raw_mode(self) -> ModeHandle:
        """Save the current attributes and switch the input to raw mode."""
        if not os.isatty(self._fd_in):
            raise ModeFailure("standard input is not a terminal")
        try:
            saved = termios.tcgetattr(self._fd_in)
            tty.setraw(self._fd_in)
        except termios.error as exc:
            raise ModeFailure(f"cannot change the TTY mode: {exc}") from exc
        self._saved_termios = saved
        logger.debug("Entered raw mode on fd %d", self._fd_in)
        return saved

    def restore_mode(self, handle: ModeHandle) -> None:
        """Re-apply the attributes saved by :meth:`acquire_raw_mode`."""
        self._saved_termios = None
        try:
            termios.tcsetattr(self._fd_in, termios.TCSADRAIN, handle)
        except termios.error as exc:
            raise ModeFailure(f"cannot restore the TTY mode: {exc}") from exc
        logger.debug("Restored terminal mode on fd %d", self._fd_in)

    @contextmanager
    def cooked(self) -> Iterator[None]:
        """Temporarily leave raw mode, e.g. while a child process runs."""
        saved = self._saved_termios
        if saved is None:
            yield
            return
        try:
            termios.tcsetattr(self._fd_in, termios.TCSADRAIN, saved)
        except termios.error as exc:
            raise ModeFailure(f"cannot restore the TTY mode: {exc}") from exc
        try:
            yield
        finally:
            try:
                tty.setraw(self._fd_in)
            except termios.error as exc:
                raise ModeFailure(f"cannot change the TTY mode: {exc}") from exc

    # -- I/O ----------------------------------------------------------------

    def read_byte(self) -> int:
        """Block until one byte is available and return it."""
        try:
            data = os.read(self._fd_in, 1)
        except OSError as exc:
            raise ReadFailure(f"cannot read from the TTY: {exc}") from exc
        if not data:
            raise ReadFailure("input stream closed")
        return data[0]

    def write(self, data: str) -> None:
        """Write directly to the output descriptor, bypassing buffering."""
        payload = data.encode("utf-8", errors="replace")
        try:
            while payload:
                written = os.write(self._fd_out, payload)
                payload = payload[written:]
        except OSError:
            pass


# ---------------------------------------------------------------------------
# Scoped raw mode
# ---------------------------------------------------------------------------


@contextmanager
def raw_mode(terminal: Terminal) -> Iterator[Terminal]:
    """Hold *terminal* in raw mode for the duration of the block.

    Restoration runs on every exit path. If restoring fails while another
    exception is already propagating, the restore failure is reported on
    stderr and the original exception continues.
    """
    handle = terminal.acquire_raw_mode()
    try:
        yield terminal
    except BaseException:
        try:
            terminal.restore_mode(handle)
        except ModeFailure as exc:
            # The terminal may still be raw, so end the line explicitly.
            print(f"pi-shell: {exc}", end="\r\n", file=sys.stderr)
        raise
    else:
        terminal.restore_mode(handle)
