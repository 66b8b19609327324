"""The line-editing loop.

``EditorLoop`` pulls raw bytes from a :class:`~pi.shell.terminal.Terminal`,
decodes them with :class:`~pi.shell.keys.KeyDecoder` and applies each event
to its :class:`LineBuffer` or :class:`HistoryStore`. Submitted lines are
handed to an executor; the loop blocks until the command finishes.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Literal, TextIO

from pi.shell.errors import BufferFull, ExecutionFailure
from pi.shell.executor import Executor
from pi.shell.history import HistoryStore
from pi.shell.keys import InputEvent, KeyDecoder
from pi.shell.line_buffer import LineBuffer
from pi.shell.prompt import current_prompt
from pi.shell.renderer import LineRenderer
from pi.shell.settings import EofPolicy
from pi.shell.terminal import Terminal, raw_mode

logger = logging.getLogger(__name__)

EditorState = Literal["editing", "terminated"]

CLEAR_COMMAND = b"clear"


class EditorLoop:
    """Owns one editing session: a line buffer, a history and a decoder.

    Args:
        terminal: Byte source and output sink, in raw mode while running.
        executor: Runs submitted command lines.
        prompt: Called before every redraw to obtain the prompt text.
        history: History to browse and append to. A fresh one by default.
        buffer: Line buffer to edit. A fresh unbounded one by default.
        renderer: Draws the line. Defaults to a renderer on *terminal*.
        eof_policy: ``"always"`` ends the session on EOT regardless of the
            line; ``"empty-line"`` only when the line is empty.
        error_stream: Where execution failures are reported. Defaults to
            ``sys.stderr`` at the time of the report.
    """

    def __init__(
        self,
        terminal: Terminal,
        executor: Executor,
        *,
        prompt: Callable[[], str] = current_prompt,
        history: HistoryStore | None = None,
        buffer: LineBuffer | None = None,
        renderer: LineRenderer | None = None,
        eof_policy: EofPolicy = "always",
        error_stream: TextIO | None = None,
    ) -> None:
        self.terminal = terminal
        self.executor = executor
        self.history = history if history is not None else HistoryStore()
        self.buffer = buffer if buffer is not None else LineBuffer()
        self._prompt = prompt
        self._renderer = renderer if renderer is not None else LineRenderer(terminal)
        self._decoder = KeyDecoder()
        self._eof_policy = eof_policy
        self._error_stream = error_stream
        self._state: EditorState = "editing"

    @property
    def state(self) -> EditorState:
        return self._state

    # -- driving ------------------------------------------------------------

    def run(self) -> None:
        """Edit lines until end of input.

        Raises:
            ReadFailure: the byte source failed; not retried.
        """
        self._render()
        while self._state == "editing":
            self.feed(self.terminal.read_byte())

    def feed(self, byte: int) -> EditorState:
        """Decode one raw byte and apply whatever events it completes."""
        for event in self._decoder.decode(byte):
            self.handle_event(event)
            if self._state == "terminated":
                break
        return self._state

    def handle_event(self, event: InputEvent) -> EditorState:
        """Apply a single decoded event and redraw the line."""
        if self._state == "terminated":
            return self._state

        kind = event.kind
        if kind == "printable":
            try:
                self.buffer.insert(event.byte)
            except BufferFull:
                self._renderer.bell()
        elif kind == "deleteBack":
            self.buffer.delete_back()
        elif kind == "clearScreen":
            self.buffer.set_content(CLEAR_COMMAND)
            self._submit(CLEAR_COMMAND)
        elif kind == "submit":
            self._submit()
        elif kind == "historyPrev":
            entry = self.history.prev()
            if entry is not None:
                self.buffer.set_content(entry)
        elif kind == "historyNext":
            entry = self.history.next()
            if entry is not None:
                self.buffer.set_content(entry)
        elif kind == "endOfInput":
            if self._eof_policy == "always" or not self.buffer:
                logger.debug("End of input, terminating")
                self._state = "terminated"
                self._renderer.newline()
                return self._state
        # unknown events are ignored

        self._render()
        return self._state

    # -- internals ----------------------------------------------------------

    def _submit(self, line: bytes | None = None) -> None:
        # An explicit line bypasses the buffer length cap.
        if line is None:
            line = self.buffer.snapshot()
        if not line:
            return

        self._renderer.newline()
        command = line.decode("ascii", errors="replace")
        with self.terminal.cooked():
            try:
                self.executor.execute(command)
            except ExecutionFailure as exc:
                logger.debug("Command %r failed: %s", command, exc)
                print(f"pi-shell: {exc}", file=self._error_stream or sys.stderr)

        self.history.append(line)
        self.buffer.clear()

    def _render(self) -> None:
        self._renderer.draw(self._prompt(), self.buffer.snapshot())


def run_session(loop: EditorLoop) -> None:
    """Run *loop* with its terminal held in raw mode.

    The terminal mode is restored however the loop ends: end of input, a
    read failure, or the ``exit`` built-in.
    """
    with raw_mode(loop.terminal):
        loop.run()
