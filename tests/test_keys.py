"""Tests for pi.shell.keys — incremental raw byte decoding."""

from __future__ import annotations

import pytest

from pi.shell.keys import (
    CLEAR_SCREEN,
    DELETE_BACK,
    END_OF_INPUT,
    HISTORY_NEXT,
    HISTORY_PREV,
    SUBMIT,
    InputEvent,
    KeyDecoder,
    printable,
    unknown,
)


def kinds(events: list[InputEvent]) -> list[str]:
    return [e.kind for e in events]


# ---------------------------------------------------------------------------
# Single bytes
# ---------------------------------------------------------------------------


class TestPrintableBytes:
    """Bytes in the printable ASCII range decode immediately."""

    @pytest.mark.parametrize("byte", [0x20, ord("a"), ord("Z"), ord("~")])
    def test_printable_range(self, byte: int) -> None:
        decoder = KeyDecoder()
        assert decoder.decode(byte) == [printable(byte)]
        assert decoder.state == "idle"

    def test_printable_event_carries_byte(self) -> None:
        event = KeyDecoder().decode(ord("q"))[0]
        assert event.kind == "printable"
        assert event.byte == ord("q")


class TestControlBytes:
    """The fixed control-byte mapping."""

    @pytest.mark.parametrize(
        ("byte", "expected"),
        [
            (0x0D, SUBMIT),
            (0x0A, SUBMIT),
            (0x7F, DELETE_BACK),
            (0x08, DELETE_BACK),
            (0x04, END_OF_INPUT),
            (0x0C, CLEAR_SCREEN),
            (0x0E, HISTORY_NEXT),
            (0x10, HISTORY_PREV),
        ],
    )
    def test_mapping(self, byte: int, expected: InputEvent) -> None:
        decoder = KeyDecoder()
        assert decoder.decode(byte) == [expected]
        assert decoder.state == "idle"

    @pytest.mark.parametrize("byte", [0x00, 0x01, 0x03, 0x09, 0x1F, 0x80, 0xFF])
    def test_unmapped_bytes_are_unknown(self, byte: int) -> None:
        decoder = KeyDecoder()
        assert decoder.decode(byte) == [unknown(bytes([byte]))]
        assert decoder.state == "idle"


# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------


class TestArrowSequences:
    """ESC [ A / ESC [ B map to history navigation."""

    def test_up_arrow_is_one_history_prev(self) -> None:
        decoder = KeyDecoder()
        assert decoder.decode_all(b"\x1b\x5b\x41") == [HISTORY_PREV]

    def test_down_arrow_is_one_history_next(self) -> None:
        decoder = KeyDecoder()
        assert decoder.decode_all(b"\x1b[B") == [HISTORY_NEXT]

    def test_nothing_emitted_until_sequence_completes(self) -> None:
        decoder = KeyDecoder()
        assert decoder.decode(0x1B) == []
        assert decoder.state == "sawEscape"
        assert decoder.decode(ord("[")) == []
        assert decoder.state == "sawEscapeBracket"
        assert decoder.pending is True
        assert decoder.decode(ord("A")) == [HISTORY_PREV]
        assert decoder.state == "idle"
        assert decoder.pending is False

    def test_arrow_keys_and_ctrl_bindings_agree(self) -> None:
        decoder = KeyDecoder()
        assert decoder.decode_all(b"\x1b[A\x10") == [HISTORY_PREV, HISTORY_PREV]
        assert decoder.decode_all(b"\x1b[B\x0e") == [HISTORY_NEXT, HISTORY_NEXT]

    def test_sequence_split_across_chunks(self) -> None:
        decoder = KeyDecoder()
        assert decoder.decode_all(b"\x1b") == []
        assert decoder.decode_all(b"[") == []
        assert decoder.decode_all(b"Ahi") == [HISTORY_PREV, printable(ord("h")), printable(ord("i"))]

    def test_unbound_byte_after_bracket_is_unknown_then_decoded(self) -> None:
        decoder = KeyDecoder()
        # Right arrow is not bound.
        assert decoder.decode_all(b"\x1b[C") == [unknown(b"\x1b["), printable(ord("C"))]
        assert decoder.state == "idle"


class TestAbandonedEscape:
    """A lone ESC must not swallow the byte that follows it."""

    def test_lone_escape_then_printable(self) -> None:
        decoder = KeyDecoder()
        events = decoder.decode_all(b"\x1ba")
        assert events == [unknown(b"\x1b"), printable(ord("a"))]

    def test_escape_then_enter_still_submits(self) -> None:
        decoder = KeyDecoder()
        assert kinds(decoder.decode_all(b"\x1b\r")) == ["unknown", "submit"]

    def test_double_escape_starts_new_sequence(self) -> None:
        decoder = KeyDecoder()
        assert decoder.decode_all(b"\x1b\x1b") == [unknown(b"\x1b")]
        assert decoder.state == "sawEscape"
        assert decoder.decode_all(b"[A") == [HISTORY_PREV]

    def test_escape_then_up_arrow(self) -> None:
        decoder = KeyDecoder()
        assert decoder.decode_all(b"\x1b\x1b[A") == [unknown(b"\x1b"), HISTORY_PREV]


class TestAbandonedBracketSequence:
    """ESC [ followed by anything but A or B returns to idle at once."""

    def test_state_returns_to_idle_after_one_byte(self) -> None:
        decoder = KeyDecoder()
        decoder.decode_all(b"\x1b[")
        events = decoder.decode(ord("1"))
        assert events == [unknown(b"\x1b["), printable(ord("1"))]
        assert decoder.state == "idle"
        assert decoder.pending is False

    def test_typed_bytes_after_stray_bracket_all_arrive(self) -> None:
        decoder = KeyDecoder()
        events = decoder.decode_all(b"\x1b[12 3x")
        assert events[0] == unknown(b"\x1b[")
        assert [e.byte for e in events[1:]] == list(b"12 3x")
        assert kinds(events[1:]) == ["printable"] * 5

    def test_control_byte_after_bracket_still_acts(self) -> None:
        decoder = KeyDecoder()
        events = decoder.decode_all(b"\x1b[\r")
        assert events == [unknown(b"\x1b["), SUBMIT]
        assert decoder.state == "idle"

    def test_escape_after_bracket_starts_new_sequence(self) -> None:
        decoder = KeyDecoder()
        events = decoder.decode_all(b"\x1b[\x1b[A")
        assert events == [unknown(b"\x1b["), HISTORY_PREV]

    def test_arrow_after_abandoned_sequence(self) -> None:
        decoder = KeyDecoder()
        events = decoder.decode_all(b"\x1b[Z\x1b[B")
        assert events == [unknown(b"\x1b["), printable(ord("Z")), HISTORY_NEXT]


class TestReset:
    def test_reset_discards_pending_sequence(self) -> None:
        decoder = KeyDecoder()
        decoder.decode_all(b"\x1b[")
        decoder.reset()
        assert decoder.state == "idle"
        assert decoder.decode(ord("A")) == [printable(ord("A"))]
