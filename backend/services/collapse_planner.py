"""
Collapsed Range Planner - Decide which unchanged spans fold into placeholders
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence

from models.alignment import CollapsedRegion, Side
from models.diff import DiffBlock

from .constants import CONTEXT_LINES, MINIMUM_COLLAPSE_THRESHOLD


def _plan_gap(
    start_left: int,
    end_left: int,
    start_right: int,
    end_right: int,
    context_lines: int,
    min_threshold: int,
    expanded_ids: Collection[int],
) -> CollapsedRegion | None:
    """Collapse one unchanged gap, keeping context lines visible at both ends"""
    left_len = max(0, end_left - start_left)
    right_len = max(0, end_right - start_right)
    if min(left_len, right_len) < 2 * context_lines + min_threshold:
        return None

    collapse_left_start = start_left + context_lines
    collapse_left_end = end_left - context_lines
    collapse_right_start = start_right + context_lines
    collapse_right_end = end_right - context_lines
    if collapse_left_end <= collapse_left_start or collapse_right_end <= collapse_right_start:
        return None

    region_id = collapse_left_start
    return CollapsedRegion(
        region_id=region_id,
        left_start=collapse_left_start,
        left_end=collapse_left_end,
        right_start=collapse_right_start,
        right_end=collapse_right_end,
        line_count=min(
            collapse_left_end - collapse_left_start,
            collapse_right_end - collapse_right_start,
        ),
        expanded=region_id in expanded_ids,
    )


def plan_collapsed_regions(
    blocks: Sequence[DiffBlock],
    left_total_lines: int,
    right_total_lines: int,
    context_lines: int = CONTEXT_LINES,
    min_threshold: int = MINIMUM_COLLAPSE_THRESHOLD,
    expanded_ids: Collection[int] = frozenset(),
) -> list[CollapsedRegion]:
    """Plan the collapsible unchanged regions between (and around) diff blocks.

    Every gap, including the one before the first block and the one after
    the last, collapses when both of its sides are at least
    ``2 * context_lines + min_threshold`` lines long. Regions the user has
    expanded are still returned, flagged ``expanded``, so that collapsing
    them again needs no recomputation.
    """
    regions: list[CollapsedRegion] = []
    left_pos = 0
    right_pos = 0

    for block in blocks:
        region = _plan_gap(
            left_pos,
            block.left_range.start,
            right_pos,
            block.right_range.start,
            context_lines,
            min_threshold,
            expanded_ids,
        )
        if region is not None:
            regions.append(region)

        left_pos = max(left_pos, block.left_range.end)
        right_pos = max(right_pos, block.right_range.end)

    region = _plan_gap(
        left_pos,
        left_total_lines,
        right_pos,
        right_total_lines,
        context_lines,
        min_threshold,
        expanded_ids,
    )
    if region is not None:
        regions.append(region)

    return regions


def visible_regions(regions: Iterable[CollapsedRegion]) -> list[CollapsedRegion]:
    """Regions that should actually be folded (not re-expanded by the user)"""
    return [region for region in regions if not region.expanded]


def collapsed_offset(regions: Iterable[CollapsedRegion], base_row: float, side: Side) -> float:
    """Rows removed above ``base_row`` on ``side`` by folded regions.

    Each folded region ending at or above ``base_row`` hides its lines but
    still occupies one placeholder row. Subtract the result from a logical
    row to get its on-screen row.
    """
    offset = 0.0
    for region in regions:
        if region.expanded:
            continue
        start, end = region.span(side)
        if end <= base_row:
            offset += (end - start) - 1.0
    return offset
