"""
Diff Generator Service - Normalize diff hunks into ordered diff blocks
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from difflib import SequenceMatcher
from typing import Any

from models.diff import BlockOperation, DiffBlock, LineRange, RawHunk

logger = logging.getLogger(__name__)

_TAG_OPERATIONS = {
    "insert": BlockOperation.INSERT,
    "add": BlockOperation.INSERT,
    "delete": BlockOperation.DELETE,
    "replace": BlockOperation.MODIFY,
    "modify": BlockOperation.MODIFY,
}


class DiffBlockError(ValueError):
    """Raised when the diff backend hands over a malformed hunk list"""


def count_lines(content: str) -> int:
    """Number of lines in a text; an empty text still has one (empty) line"""
    if not content:
        return 1
    return max(1, len(content.split("\n")))


def _coerce_hunk(raw: Any) -> RawHunk | None:
    """Turn a RawHunk, mapping or difflib opcode into a RawHunk; None for no-op hunks"""
    if isinstance(raw, RawHunk):
        hunk = raw
    elif isinstance(raw, Mapping):
        hunk = RawHunk.model_validate(raw)
    elif isinstance(raw, (tuple, list)) and len(raw) == 5:
        tag, i1, i2, j1, j2 = raw
        if tag == "equal":
            return None
        hunk = RawHunk(left_start=i1, left_end=i2, right_start=j1, right_end=j2, tag=tag)
    else:
        raise DiffBlockError(f"Unsupported hunk format: {raw!r}")

    for name, start, end in (
        ("left", hunk.left_start, hunk.left_end),
        ("right", hunk.right_start, hunk.right_end),
    ):
        if start < 0:
            raise DiffBlockError(f"Hunk {name} range [{start}, {end}) starts before line 0")
        if end < start:
            raise DiffBlockError(f"Hunk {name} range [{start}, {end}) ends before it starts")

    if hunk.left_start == hunk.left_end and hunk.right_start == hunk.right_end:
        logger.debug("Dropping empty hunk at left=%d right=%d", hunk.left_start, hunk.right_start)
        return None
    return hunk


def _operation_for(hunk: RawHunk) -> BlockOperation:
    if hunk.left_start == hunk.left_end:
        operation = BlockOperation.INSERT
    elif hunk.right_start == hunk.right_end:
        operation = BlockOperation.DELETE
    else:
        operation = BlockOperation.MODIFY

    if hunk.tag is not None:
        tagged = _TAG_OPERATIONS.get(hunk.tag.lower())
        if tagged is None:
            raise DiffBlockError(f"Unknown hunk tag {hunk.tag!r}")
        if tagged != operation:
            raise DiffBlockError(
                f"Hunk tagged {hunk.tag!r} has ranges of a {operation.value} block: "
                f"left=[{hunk.left_start}, {hunk.left_end}) right=[{hunk.right_start}, {hunk.right_end})"
            )
    return operation


def compute_blocks(raw_hunks: Iterable[Any]) -> list[DiffBlock]:
    """Normalize raw hunks into DiffBlocks sorted by left start.

    Accepts RawHunk models, plain dicts with the same keys, or difflib
    opcode tuples ``(tag, i1, i2, j1, j2)``; ``equal`` opcodes and hunks
    with both sides empty are skipped. Overlapping or crossing hunks are
    rejected with DiffBlockError.
    """
    hunks = [hunk for hunk in (_coerce_hunk(raw) for raw in raw_hunks) if hunk is not None]
    hunks.sort(key=lambda h: (h.left_start, h.right_start))

    blocks: list[DiffBlock] = []
    prev: RawHunk | None = None
    for index, hunk in enumerate(hunks):
        if prev is not None and (
            hunk.left_start < prev.left_end or hunk.right_start < prev.right_end
        ):
            raise DiffBlockError(
                f"Diff blocks overlap or are out of order: "
                f"left=[{prev.left_start}, {prev.left_end}) right=[{prev.right_start}, {prev.right_end}) "
                f"is followed by left=[{hunk.left_start}, {hunk.left_end}) "
                f"right=[{hunk.right_start}, {hunk.right_end})"
            )
        blocks.append(
            DiffBlock(
                left_range=LineRange(start=hunk.left_start, end=hunk.left_end),
                right_range=LineRange(start=hunk.right_start, end=hunk.right_end),
                operation=_operation_for(hunk),
                index=index,
            )
        )
        prev = hunk

    return blocks


class DiffGenerator:
    """Generate diff blocks for a pair of texts"""

    def split_lines(self, content: str) -> list[str]:
        """Split on newlines so line indices agree with count_lines()"""
        return content.split("\n") if content else [""]

    def generate_blocks(self, left_content: str, right_content: str) -> list[DiffBlock]:
        """Diff two texts line by line and return the normalized blocks"""
        hunks = self._extract_hunks(
            self.split_lines(left_content),
            self.split_lines(right_content),
        )
        blocks = compute_blocks(hunks)
        logger.debug("Generated %d diff blocks", len(blocks))
        return blocks

    def _extract_hunks(
        self,
        original: list[str],
        modified: list[str],
    ) -> list[RawHunk]:
        """Extract individual change hunks from diff"""
        matcher = SequenceMatcher(None, original, modified, autojunk=False)
        hunks = []

        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                continue

            hunks.append(
                RawHunk(
                    left_start=i1,
                    left_end=i2,
                    right_start=j1,
                    right_end=j2,
                    tag=tag,
                )
            )

        return hunks
