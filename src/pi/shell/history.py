"""Submitted-line history with a browsing cursor."""

from __future__ import annotations

import logging
from collections import deque

logger = logging.getLogger(__name__)


class HistoryStore:
    """Ordered list of previously submitted lines.

    ``cursor`` ranges over ``0..len(history)``; ``cursor == len(history)``
    means the user is on the live line rather than browsing. Navigation
    saturates at both ends instead of wrapping.

    Args:
        max_entries: Optional capacity. When full, the oldest entry is
            dropped on append. ``None`` means unbounded.
    """

    def __init__(self, *, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._entries: deque[bytes] = deque(maxlen=max_entries)
        self._cursor: int = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def max_entries(self) -> int | None:
        return self._entries.maxlen

    @property
    def browsing(self) -> bool:
        return self._cursor < len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[bytes]:
        return list(self._entries)

    def append(self, line: bytes) -> None:
        """Record *line* (ignored when empty) and return to the live position."""
        if line:
            self._entries.append(bytes(line))
        self._cursor = len(self._entries)

    def prev(self) -> bytes | None:
        """Step back one entry; stays on the oldest entry once reached."""
        if self._cursor > 0:
            self._cursor -= 1
        if not self._entries:
            return None
        logger.debug("History cursor at %d of %d", self._cursor, len(self._entries))
        return self._entries[self._cursor]

    def next(self) -> bytes | None:
        """Step forward one entry.

        Returns None without moving when already on the newest entry, on the
        live line, or when the history is empty.
        """
        if self._cursor < len(self._entries) - 1:
            self._cursor += 1
            logger.debug("History cursor at %d of %d", self._cursor, len(self._entries))
            return self._entries[self._cursor]
        return None

    def reset_cursor(self) -> None:
        self._cursor = len(self._entries)
