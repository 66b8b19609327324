"""Editable single-line byte buffer with a cursor."""

from __future__ import annotations

from pi.shell.errors import BufferFull


class LineBuffer:
    """An ordered sequence of bytes plus a cursor.

    The cursor always satisfies ``0 <= cursor <= len(content)``. Editing is
    byte-oriented; there is no notion of multi-byte characters.

    Args:
        max_length: Optional cap on the content length. ``None`` means
            unbounded. Inserting past the cap raises :class:`BufferFull`.
    """

    def __init__(self, *, max_length: int | None = None) -> None:
        if max_length is not None and max_length < 0:
            raise ValueError("max_length must be >= 0")
        self._content = bytearray()
        self._cursor: int = 0
        self._max_length = max_length

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def max_length(self) -> int | None:
        return self._max_length

    def __len__(self) -> int:
        return len(self._content)

    def __bool__(self) -> bool:
        return bool(self._content)

    def insert(self, byte: int) -> None:
        """Insert *byte* at the cursor and advance the cursor."""
        if self._max_length is not None and len(self._content) >= self._max_length:
            raise BufferFull(f"line is limited to {self._max_length} bytes")
        self._content.insert(self._cursor, byte)
        self._cursor += 1

    def delete_back(self) -> None:
        """Remove the byte before the cursor. No-op at the start of the line."""
        if self._cursor == 0:
            return
        del self._content[self._cursor - 1]
        self._cursor -= 1

    def clear(self) -> None:
        self._content.clear()
        self._cursor = 0

    def set_content(self, data: bytes) -> None:
        """Replace the whole line and move the cursor to its end."""
        if self._max_length is not None:
            data = data[: self._max_length]
        self._content = bytearray(data)
        self._cursor = len(self._content)

    def snapshot(self) -> bytes:
        """Return an immutable copy of the current content."""
        return bytes(self._content)
