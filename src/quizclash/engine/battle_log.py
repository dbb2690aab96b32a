"""Bounded battle log.

Written by the engine, read by the presentation layer through snapshots.
"""

from __future__ import annotations

from collections import deque
from datetime import datetime
from typing import Callable, Optional

from quizclash.parameters import BATTLE_LOG_CAPACITY


class BattleLog:
    """FIFO of timestamped event lines, oldest evicted first.

    Args:
        capacity: Maximum number of retained entries
        clock: Callable returning the current time (injectable for tests)
    """

    def __init__(
        self,
        capacity: int = BATTLE_LOG_CAPACITY,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"Battle log capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._clock = clock or datetime.now
        self._entries: deque[str] = deque(maxlen=capacity)

    def append(self, message: str) -> str:
        """Timestamp and store a message. Returns the stored line."""
        line = f"[{self._clock().strftime('%H:%M:%S')}] {message}"
        self._entries.append(line)
        return line

    def reset(self, message: str) -> None:
        """Drop all entries and start over with a single message."""
        self._entries.clear()
        self.append(message)

    def entries(self, last: Optional[int] = None) -> list[str]:
        """Copy of the entries, optionally only the last N."""
        lines = list(self._entries)
        if last is not None:
            return lines[-last:] if last > 0 else []
        return lines

    def __len__(self) -> int:
        return len(self._entries)
