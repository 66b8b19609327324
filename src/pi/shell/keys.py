"""Raw terminal byte decoding.

``KeyDecoder`` consumes input one byte at a time and turns single control
bytes and ``ESC [`` arrow-key sequences into :class:`InputEvent` values.
It never waits for a fixed number of bytes: a byte is dispatched as soon as
it arrives unless it continues a pending escape sequence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Byte constants
# ---------------------------------------------------------------------------

ESC = 0x1B
CSI_BRACKET = 0x5B  # "["
ARROW_UP = 0x41  # "A"
ARROW_DOWN = 0x42  # "B"

PRINTABLE_MIN = 0x20
PRINTABLE_MAX = 0x7E

# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

EventKind = Literal[
    "printable",
    "submit",
    "deleteBack",
    "endOfInput",
    "clearScreen",
    "historyPrev",
    "historyNext",
    "unknown",
]


@dataclass(frozen=True)
class InputEvent:
    """A decoded key press.

    ``data`` holds the raw bytes that produced the event: the character for
    ``printable`` events, the offending bytes for ``unknown`` ones.
    """

    kind: EventKind
    data: bytes = b""

    @property
    def byte(self) -> int:
        """The single byte carried by a ``printable`` event."""
        return self.data[0]


def printable(byte: int) -> InputEvent:
    return InputEvent("printable", bytes([byte]))


def unknown(data: bytes) -> InputEvent:
    return InputEvent("unknown", data)


SUBMIT = InputEvent("submit")
DELETE_BACK = InputEvent("deleteBack")
END_OF_INPUT = InputEvent("endOfInput")
CLEAR_SCREEN = InputEvent("clearScreen")
HISTORY_PREV = InputEvent("historyPrev")
HISTORY_NEXT = InputEvent("historyNext")

# Control bytes recognised outside of escape sequences. Ctrl-N / Ctrl-P are
# an alternate path to history navigation for terminals that do not forward
# arrow keys.
CONTROL_BYTES: dict[int, InputEvent] = {
    0x0D: SUBMIT,  # CR
    0x0A: SUBMIT,  # LF
    0x7F: DELETE_BACK,  # DEL
    0x08: DELETE_BACK,  # BS
    0x04: END_OF_INPUT,  # Ctrl-D / EOT
    0x0C: CLEAR_SCREEN,  # Ctrl-L / FF
    0x0E: HISTORY_NEXT,  # Ctrl-N
    0x10: HISTORY_PREV,  # Ctrl-P
}

# Final bytes of ``ESC [ x`` sequences.
CSI_FINAL_BYTES: dict[int, InputEvent] = {
    ARROW_UP: HISTORY_PREV,
    ARROW_DOWN: HISTORY_NEXT,
}

# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------

DecoderState = Literal["idle", "sawEscape", "sawEscapeBracket"]


class KeyDecoder:
    """Incremental decoder for raw terminal input.

    An escape that does not complete a known sequence yields one ``unknown``
    event for the pending bytes, and the byte that broke it is then decoded
    on its own: ``ESC a`` produces ``unknown`` then ``printable(a)``, and
    ``ESC [ C`` produces ``unknown`` then ``printable(C)``. No typed byte is
    swallowed, and at most two bytes are ever pending.
    """

    def __init__(self) -> None:
        self._state: DecoderState = "idle"
        self._sequence = bytearray()

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def pending(self) -> bool:
        """True while an escape sequence has started but not completed."""
        return self._state != "idle"

    def reset(self) -> None:
        self._state = "idle"
        self._sequence.clear()

    def decode(self, byte: int) -> list[InputEvent]:
        """Feed one byte and return the events it completes.

        The list is empty while an escape sequence is pending, and holds two
        events when the byte abandons a sequence and is then decoded itself.
        """
        if self._state == "idle":
            return self._decode_idle(byte)

        if self._state == "sawEscape":
            if byte == CSI_BRACKET:
                self._state = "sawEscapeBracket"
                self._sequence.append(byte)
                return []
            abandoned = self._abandon()
            return [abandoned, *self._decode_idle(byte)]

        # sawEscapeBracket
        event = CSI_FINAL_BYTES.get(byte)
        if event is not None:
            self.reset()
            return [event]
        abandoned = self._abandon()
        return [abandoned, *self._decode_idle(byte)]

    def decode_all(self, data: bytes) -> list[InputEvent]:
        """Decode a chunk, returning every event it completes."""
        events: list[InputEvent] = []
        for byte in data:
            events.extend(self.decode(byte))
        return events

    def _decode_idle(self, byte: int) -> list[InputEvent]:
        if byte == ESC:
            self._state = "sawEscape"
            self._sequence.append(byte)
            return []

        event = CONTROL_BYTES.get(byte)
        if event is not None:
            return [event]

        if PRINTABLE_MIN <= byte <= PRINTABLE_MAX:
            return [printable(byte)]

        return [self._unknown(bytes([byte]))]

    def _abandon(self) -> InputEvent:
        sequence = bytes(self._sequence)
        self.reset()
        return self._unknown(sequence)

    @staticmethod
    def _unknown(data: bytes) -> InputEvent:
        logger.debug("Unrecognised input %r", data)
        return unknown(data)
