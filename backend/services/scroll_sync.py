"""
Scroll Sync Controller - Keep two panes scrolled together without echo loops
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import NamedTuple

from models.alignment import Side

from .constants import DEFAULT_LINE_HEIGHT, EPSILON
from .line_mapper import LineMapper

logger = logging.getLogger(__name__)

ScrollWriter = Callable[[Side, float], None]


class SyncState(str, Enum):
    """Whether a programmatic scroll write is in flight"""

    IDLE = "idle"
    SYNCING = "syncing"


class ScrollWrite(NamedTuple):
    """A scroll position applied to one pane"""

    side: Side
    rows: float


class ScrollSyncController:
    """Arbitrate scroll events between the left and right panes.

    The host reports user scrolling through ``notify_scrolled`` and later
    calls ``flush`` once per processing cycle. Echo events caused by our
    own writes arrive while the state is SYNCING and are dropped.
    """

    def __init__(self, line_height: float = DEFAULT_LINE_HEIGHT):
        self.line_height = line_height
        self.state = SyncState.IDLE
        self._rows = {Side.LEFT: 0.0, Side.RIGHT: 0.0}
        self._pending: dict[Side, float] = {}  # source side -> latest rows

    @property
    def is_syncing(self) -> bool:
        return self.state is SyncState.SYNCING

    def rows(self, side: Side) -> float:
        """Last known scroll position of a pane, in rows"""
        return self._rows[side]

    def scroll_offset(self, side: Side) -> float:
        """Last known scroll position of a pane, in pixels"""
        return self._rows[side] * self.line_height

    def has_pending(self, side: Side | None = None) -> bool:
        if side is None:
            return bool(self._pending)
        return side in self._pending

    def notify_scrolled(self, side: Side, rows: float) -> bool:
        """Record a scroll-position change on ``side``; True if a sync was requested"""
        if self.is_syncing:
            return False
        if abs(rows - self._rows[side]) <= EPSILON:
            return False

        self._rows[side] = rows
        self._pending[side] = rows
        return True

    def flush(self, mapper: LineMapper, writer: ScrollWriter) -> list[ScrollWrite]:
        """Apply pending sync requests through ``writer`` and return the writes made"""
        if self.is_syncing:
            logger.debug("Dropping nested scroll sync flush")
            return []

        pending, self._pending = self._pending, {}
        writes: list[ScrollWrite] = []

        for source in (Side.LEFT, Side.RIGHT):
            if source not in pending:
                continue
            source_rows = pending[source]
            target = source.other
            if source is Side.LEFT:
                target_rows = mapper.forward(source_rows)
                target_total = mapper.right_total_lines
            else:
                target_rows = mapper.inverse(source_rows)
                target_total = mapper.left_total_lines

            if not 0.0 <= target_rows < target_total:
                continue
            if abs(target_rows - self._rows[target]) <= EPSILON:
                continue

            self.state = SyncState.SYNCING
            try:
                self._rows[target] = target_rows
                writer(target, target_rows)
            finally:
                self.state = SyncState.IDLE
            writes.append(ScrollWrite(target, target_rows))

        return writes

    def reset(self, writer: ScrollWriter | None = None) -> None:
        """Scroll both panes back to the top and forget pending requests"""
        self._pending.clear()
        self.state = SyncState.SYNCING
        try:
            for side in (Side.LEFT, Side.RIGHT):
                self._rows[side] = 0.0
                if writer is not None:
                    writer(side, 0.0)
        finally:
            self.state = SyncState.IDLE
