"""
Diff Session - Owns the alignment state for one left/right document pair
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict

from models.alignment import CollapsedRegion, ConnectorCurve, Side
from models.diff import DiffBlock

from .collapse_planner import collapsed_offset, plan_collapsed_regions, visible_regions
from .connector_builder import build_connector_curves
from .constants import (
    CONTEXT_LINES,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_VIEWPORT_HEIGHT,
    MINIMUM_COLLAPSE_THRESHOLD,
)
from .diff_generator import DiffGenerator, compute_blocks, count_lines
from .line_mapper import LineMapper
from .scroll_sync import ScrollSyncController, ScrollWrite, ScrollWriter

logger = logging.getLogger(__name__)


class DiffSnapshot(BaseModel):
    """Everything derived from one diff computation, replaced as a unit"""

    model_config = ConfigDict(frozen=True)

    blocks: tuple[DiffBlock, ...] = ()
    curves: tuple[ConnectorCurve, ...] = ()
    left_total_lines: int = 1
    right_total_lines: int = 1


class DiffSession:
    """Alignment state for a single side-by-side diff view"""

    def __init__(
        self,
        collapse_unchanged: bool = True,
        context_lines: int = CONTEXT_LINES,
        minimum_collapse_threshold: int = MINIMUM_COLLAPSE_THRESHOLD,
        line_height: float = DEFAULT_LINE_HEIGHT,
        on_settings_change: Callable[[bool], Any] | None = None,
    ):
        self.snapshot = DiffSnapshot()
        self.collapse_unchanged = collapse_unchanged
        self.context_lines = context_lines
        self.minimum_collapse_threshold = minimum_collapse_threshold
        self.expanded_region_ids: set[int] = set()
        self.on_settings_change = on_settings_change
        self.scroll = ScrollSyncController(line_height)

        default_visible = DEFAULT_VIEWPORT_HEIGHT / DEFAULT_LINE_HEIGHT
        self._visible_lines = {Side.LEFT: default_visible, Side.RIGHT: default_visible}
        self._diff_generator = DiffGenerator()
        self._mapper: LineMapper | None = None
        self._regions: list[CollapsedRegion] | None = None

    # ========== Content ==========

    def update_content(self, left_content: str, right_content: str) -> DiffSnapshot:
        """Diff two texts and replace all derived state"""
        blocks = self._diff_generator.generate_blocks(left_content, right_content)
        return self._replace(blocks, count_lines(left_content), count_lines(right_content))

    def update_blocks(
        self,
        raw_hunks: Iterable[Any],
        left_total_lines: int,
        right_total_lines: int,
    ) -> DiffSnapshot:
        """Replace all derived state from an externally computed hunk list"""
        return self._replace(compute_blocks(raw_hunks), left_total_lines, right_total_lines)

    def _replace(self, blocks: list[DiffBlock], left_total: int, right_total: int) -> DiffSnapshot:
        snapshot = DiffSnapshot(
            blocks=tuple(blocks),
            curves=tuple(build_connector_curves(blocks)),
            left_total_lines=left_total,
            right_total_lines=right_total,
        )
        # Single assignment; nothing reads a half-built snapshot.
        self.snapshot = snapshot
        self.expanded_region_ids.clear()
        self._mapper = None
        self._regions = None
        self.scroll.reset()
        logger.debug(
            "Diff updated: %d blocks, %d curves, %d/%d lines",
            len(snapshot.blocks),
            len(snapshot.curves),
            left_total,
            right_total,
        )
        return snapshot

    @property
    def blocks(self) -> tuple[DiffBlock, ...]:
        return self.snapshot.blocks

    @property
    def curves(self) -> tuple[ConnectorCurve, ...]:
        return self.snapshot.curves

    # ========== Collapsing ==========

    def collapsed_regions(self) -> list[CollapsedRegion]:
        """All planned regions, expanded ones included; empty when collapsing is off"""
        if self._regions is None:
            if not self.collapse_unchanged:
                self._regions = []
            else:
                self._regions = plan_collapsed_regions(
                    self.snapshot.blocks,
                    self.snapshot.left_total_lines,
                    self.snapshot.right_total_lines,
                    self.context_lines,
                    self.minimum_collapse_threshold,
                    self.expanded_region_ids,
                )
        return self._regions

    def visible_collapsed_regions(self) -> list[CollapsedRegion]:
        return visible_regions(self.collapsed_regions())

    def expand_region(self, region_id: int) -> None:
        """Unfold one region; turns collapsing off once nothing is left folded"""
        self.expanded_region_ids.add(region_id)
        self._regions = None
        if self.collapse_unchanged and not self.visible_collapsed_regions():
            self.set_collapse_unchanged(False)

    def set_collapse_unchanged(self, enabled: bool) -> None:
        self.collapse_unchanged = enabled
        self.expanded_region_ids.clear()
        self._regions = None
        if self.on_settings_change is not None:
            self.on_settings_change(enabled)

    def toggle_collapse_unchanged(self) -> bool:
        self.set_collapse_unchanged(not self.collapse_unchanged)
        return self.collapse_unchanged

    def screen_row(self, side: Side, line: float) -> float:
        """Logical row on ``side`` converted to its on-screen row"""
        return line - collapsed_offset(self.visible_collapsed_regions(), line, side)

    # ========== Mapping ==========

    def set_visible_lines(self, side: Side, visible_lines: float) -> None:
        self._visible_lines[side] = max(0.0, visible_lines)
        self._mapper = None

    def set_viewport(self, side: Side, height_px: float, line_height: float | None = None) -> None:
        """Record a pane's pixel height; the visible row count follows from the line height"""
        line_height = line_height or self.scroll.line_height
        if line_height <= 0:
            raise ValueError(f"Line height must be positive, got {line_height}")
        self.scroll.line_height = line_height
        self.set_visible_lines(side, height_px / line_height)

    @property
    def mapper(self) -> LineMapper:
        if self._mapper is None:
            self._mapper = LineMapper(
                self.snapshot.curves,
                self.snapshot.left_total_lines,
                self.snapshot.right_total_lines,
                left_half_viewport=self._visible_lines[Side.LEFT] / 2.0,
                right_half_viewport=self._visible_lines[Side.RIGHT] / 2.0,
            )
        return self._mapper

    def map_forward(self, left_line: float) -> float:
        return self.mapper.forward(left_line)

    def map_inverse(self, right_line: float) -> float:
        return self.mapper.inverse(right_line)

    # ========== Scrolling ==========

    def on_scroll(self, side: Side, rows: float) -> bool:
        return self.scroll.notify_scrolled(side, rows)

    def flush_scroll(self, writer: ScrollWriter) -> list[ScrollWrite]:
        return self.scroll.flush(self.mapper, writer)
