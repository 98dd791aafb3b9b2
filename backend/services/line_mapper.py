"""
Line Mapper - Translate scroll rows between the left and right texts

The mapping is piecewise over the connector curves. Unchanged stretches
shift by the running size difference of the blocks above them; inside a
block where the source side is longer than the destination side, the
destination holds still at a "stationary" row and only catches up once
the source has scrolled past the excess lines. Everything works on
logical (un-collapsed) rows.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from models.alignment import ConnectorCurve


class _Span(NamedTuple):
    """A block projected onto one mapping direction"""

    src_start: float
    src_end: float
    src_len: float
    dst_start: float
    dst_end: float
    dst_len: float


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(value, upper))


def _bounds(start: int, end: int, crushed: bool) -> tuple[float, float, float]:
    if crushed:
        return float(start), float(start), 0.0
    return float(start), float(end + 1), float(end + 1 - start)


def _forward_spans(curves: Sequence[ConnectorCurve]) -> list[_Span]:
    spans = []
    for curve in curves:
        left = _bounds(curve.left_start, curve.left_end, curve.left_crushed)
        right = _bounds(curve.right_start, curve.right_end, curve.right_crushed)
        spans.append(_Span(*left, *right))
    return spans


def _inverse_spans(curves: Sequence[ConnectorCurve]) -> list[_Span]:
    spans = []
    for curve in curves:
        left = _bounds(curve.left_start, curve.left_end, curve.left_crushed)
        right = _bounds(curve.right_start, curve.right_end, curve.right_crushed)
        spans.append(_Span(*right, *left))
    return spans


def _map_line(spans: Sequence[_Span], line: float, dst_total_lines: int, half_viewport: float) -> float:
    dst_max = float(max(dst_total_lines - 1, 0))
    if not spans:
        return _clamp(line, dst_max)

    # Rows above the top of the text behave like the top row
    line = max(line, 0.0)
    cumulative_offset = 0.0
    prev_src_end = 0.0

    for span in spans:
        has_extra_src = span.src_len > span.dst_len
        # Where the previous stretch left the destination; holding below it would scroll backwards.
        floor = _clamp(prev_src_end + cumulative_offset, dst_max)

        if prev_src_end <= line < span.src_start:
            result = line + cumulative_offset
            if has_extra_src:
                stationary = max(_clamp(span.dst_start - half_viewport, dst_max), floor)
                result = min(result, stationary)
            return _clamp(result, dst_max)

        # A crushed source side is a single point that still resolves into the block.
        inside = span.src_start <= line < span.src_end or (span.src_len == 0 and line == span.src_start)
        if inside:
            progress = line - span.src_start

            if has_extra_src:
                stationary = max(_clamp(span.dst_start - half_viewport, dst_max), floor)
                extra = span.src_len - span.dst_len
                resume_at = min(extra, max(span.src_len - half_viewport, 0.0))
                if progress < resume_at:
                    return stationary

                fallback = _clamp(span.dst_start, dst_max)
                denom = span.src_len - resume_at
                if denom <= 0.0:
                    return fallback
                t = min(max((progress - resume_at) / denom, 0.0), 1.0)
                end = min(max(span.dst_end, stationary), dst_max)
                if end - stationary <= 0.0:
                    return fallback
                return _clamp(stationary + t * (end - stationary), dst_max)

            ratio = progress / span.src_len if span.src_len > 0.0 else 0.5
            return _clamp(span.dst_start + ratio * span.dst_len, dst_max)

        cumulative_offset += span.dst_len - span.src_len
        prev_src_end = span.src_end

    return _clamp(line + cumulative_offset, dst_max)


def map_forward(
    curves: Sequence[ConnectorCurve],
    left_line: float,
    right_total_lines: int,
    half_viewport_rows: float,
) -> float:
    """Map a left scroll row to the matching right scroll row"""
    return _map_line(_forward_spans(curves), left_line, right_total_lines, half_viewport_rows)


def map_inverse(
    curves: Sequence[ConnectorCurve],
    right_line: float,
    left_total_lines: int,
    half_viewport_rows: float,
) -> float:
    """Map a right scroll row to the matching left scroll row.

    Defined independently of map_forward with the sides swapped; the two
    are not exact inverses inside size-mismatched blocks.
    """
    return _map_line(_inverse_spans(curves), right_line, left_total_lines, half_viewport_rows)


class LineMapper:
    """Both mapping directions bound to one curve list and viewport pair.

    Build a new instance whenever the curves, totals or viewports change.
    """

    def __init__(
        self,
        curves: Sequence[ConnectorCurve],
        left_total_lines: int,
        right_total_lines: int,
        left_half_viewport: float = 0.0,
        right_half_viewport: float = 0.0,
    ):
        self.curves = list(curves)
        self.left_total_lines = left_total_lines
        self.right_total_lines = right_total_lines
        self.left_half_viewport = left_half_viewport
        self.right_half_viewport = right_half_viewport
        self._forward = _forward_spans(self.curves)
        self._inverse = _inverse_spans(self.curves)

    def forward(self, left_line: float) -> float:
        return _map_line(self._forward, left_line, self.right_total_lines, self.right_half_viewport)

    def inverse(self, right_line: float) -> float:
        return _map_line(self._inverse, right_line, self.left_total_lines, self.left_half_viewport)
