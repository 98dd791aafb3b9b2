"""
Connector Curve Builder - One alignment descriptor per diff block
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from models.alignment import ConnectorCurve, ConnectorKind
from models.diff import BlockOperation, DiffBlock

_KINDS = {
    BlockOperation.INSERT: ConnectorKind.INSERT,
    BlockOperation.DELETE: ConnectorKind.DELETE,
    BlockOperation.MODIFY: ConnectorKind.MODIFY,
}


class CurveAnchor(NamedTuple):
    """Un-collapsed rows a connector attaches to on each side"""

    curve: ConnectorCurve
    left_top: float
    left_bottom: float
    right_top: float
    right_bottom: float


def _extra_lines(left_len: int, right_len: int, left_crushed: bool, right_crushed: bool) -> tuple[int, int]:
    """Extra (inserted, deleted) lines a block contributes to everything below it"""
    if left_crushed:
        return right_len, 0
    if right_crushed:
        return 0, left_len
    if left_len < right_len:
        return right_len - left_len, 0
    if right_len < left_len:
        return 0, left_len - right_len
    return 0, 0


def build_connector_curves(blocks: Sequence[DiffBlock]) -> list[ConnectorCurve]:
    """Derive connector curves from diff blocks.

    Blocks with both sides empty are dropped. A crushed (empty) side
    collapses to its start line, and the curve's ``focus_line`` places it
    in that side's own rows: the opposite side's start minus the extra
    lines the opposite side has gained in all earlier blocks.
    """
    curves: list[ConnectorCurve] = []
    inserted_above = 0
    deleted_above = 0

    for block in blocks:
        left, right = block.left_range, block.right_range
        left_crushed = left.is_empty()
        right_crushed = right.is_empty()
        if left_crushed and right_crushed:
            continue

        if left_crushed:
            focus_line = max(0, right.start - inserted_above)
        elif right_crushed:
            focus_line = max(0, left.start - deleted_above)
        else:
            focus_line = left.start

        curves.append(
            ConnectorCurve(
                left_start=left.start,
                left_end=left.start if left_crushed else left.end - 1,
                right_start=right.start,
                right_end=right.start if right_crushed else right.end - 1,
                kind=_KINDS[block.operation],
                left_crushed=left_crushed,
                right_crushed=right_crushed,
                block_index=block.index,
                focus_line=focus_line,
            )
        )

        inserted, deleted = _extra_lines(left.length, right.length, left_crushed, right_crushed)
        inserted_above += inserted
        deleted_above += deleted

    return curves


def anchor_rows(curves: Sequence[ConnectorCurve]) -> list[CurveAnchor]:
    """Resolve each curve to the rows its connector spans on both sides.

    A crushed side has zero height and sits at ``focus_line`` shifted by
    the lines the other side has lost (for a crushed left) or gained (for
    a crushed right) above it. Rows are logical; subtract
    ``collapsed_offset`` to get on-screen rows.
    """
    anchors: list[CurveAnchor] = []
    inserted_above = 0
    deleted_above = 0

    for curve in curves:
        if curve.left_crushed:
            left_top = left_bottom = float(curve.focus_line + deleted_above)
        else:
            left_top, left_bottom = float(curve.left_start), float(curve.left_end + 1)

        if curve.right_crushed:
            right_top = right_bottom = float(curve.focus_line + inserted_above)
        else:
            right_top, right_bottom = float(curve.right_start), float(curve.right_end + 1)

        anchors.append(CurveAnchor(curve, left_top, left_bottom, right_top, right_bottom))

        left_len = curve.left_end - curve.left_start + 1
        right_len = curve.right_end - curve.right_start + 1
        inserted, deleted = _extra_lines(left_len, right_len, curve.left_crushed, curve.right_crushed)
        inserted_above += inserted
        deleted_above += deleted

    return anchors
