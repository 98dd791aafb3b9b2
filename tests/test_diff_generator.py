"""Tests for diff block normalization and the difflib-backed generator."""

from __future__ import annotations

import pytest

from models.diff import BlockOperation, DiffBlock, LineRange, RawHunk
from services.diff_generator import DiffBlockError, DiffGenerator, compute_blocks, count_lines


@pytest.mark.parametrize(
    "content, expected",
    [("", 1), ("a", 1), ("a\nb", 2), ("a\nb\n", 3), ("\n\n", 3)],
)
def test_count_lines(content: str, expected: int) -> None:
    assert count_lines(content) == expected


def test_compute_blocks_from_opcodes_skips_equal_and_derives_operations() -> None:
    blocks = compute_blocks(
        [
            ("equal", 0, 2, 0, 2),
            ("replace", 2, 5, 2, 8),
            ("equal", 5, 6, 8, 9),
            ("insert", 6, 6, 9, 11),
            ("delete", 6, 9, 11, 11),
        ]
    )

    assert [b.operation for b in blocks] == [
        BlockOperation.MODIFY,
        BlockOperation.INSERT,
        BlockOperation.DELETE,
    ]
    assert [b.index for b in blocks] == [0, 1, 2]
    assert blocks[0].left_range == LineRange(start=2, end=5)
    assert blocks[0].right_range == LineRange(start=2, end=8)
    assert blocks[1].left_range.is_empty()
    assert blocks[2].right_range.is_empty()


def test_compute_blocks_sorts_by_left_start() -> None:
    blocks = compute_blocks(
        [
            RawHunk(left_start=10, left_end=12, right_start=10, right_end=11),
            {"left_start": 2, "left_end": 3, "right_start": 2, "right_end": 3},
        ]
    )

    assert [b.left_range.start for b in blocks] == [2, 10]
    assert [b.index for b in blocks] == [0, 1]


def test_compute_blocks_drops_hunks_with_no_lines() -> None:
    blocks = compute_blocks([RawHunk(left_start=4, left_end=4, right_start=4, right_end=4)])
    assert blocks == []


def test_compute_blocks_rejects_reversed_range() -> None:
    with pytest.raises(DiffBlockError, match="ends before it starts"):
        compute_blocks([RawHunk(left_start=5, left_end=3, right_start=5, right_end=6)])


def test_compute_blocks_rejects_negative_start() -> None:
    with pytest.raises(DiffBlockError, match="before line 0"):
        compute_blocks([RawHunk(left_start=-1, left_end=3, right_start=0, right_end=4)])


def test_compute_blocks_rejects_overlapping_hunks() -> None:
    with pytest.raises(DiffBlockError, match="overlap"):
        compute_blocks(
            [
                ("replace", 2, 6, 2, 6),
                ("replace", 4, 8, 7, 9),
            ]
        )


def test_compute_blocks_rejects_crossing_hunks() -> None:
    # Left order and right order disagree
    with pytest.raises(DiffBlockError):
        compute_blocks(
            [
                ("replace", 2, 3, 10, 11),
                ("replace", 5, 6, 4, 5),
            ]
        )


def test_compute_blocks_rejects_tag_that_contradicts_ranges() -> None:
    with pytest.raises(DiffBlockError, match="tagged 'insert'"):
        compute_blocks([("insert", 2, 4, 2, 2)])


def test_compute_blocks_rejects_unknown_tag() -> None:
    with pytest.raises(DiffBlockError, match="Unknown hunk tag"):
        compute_blocks([RawHunk(left_start=1, left_end=2, right_start=1, right_end=2, tag="move")])


def test_compute_blocks_rejects_unsupported_input() -> None:
    with pytest.raises(DiffBlockError, match="Unsupported hunk format"):
        compute_blocks([(1, 2, 3)])


def test_diff_block_validates_operation_against_ranges() -> None:
    with pytest.raises(ValueError):
        DiffBlock(
            left_range=LineRange(start=1, end=3),
            right_range=LineRange(start=1, end=2),
            operation=BlockOperation.INSERT,
        )
    with pytest.raises(ValueError):
        DiffBlock(
            left_range=LineRange(start=1, end=1),
            right_range=LineRange(start=1, end=2),
            operation=BlockOperation.MODIFY,
        )


def test_line_range_rejects_end_before_start() -> None:
    with pytest.raises(ValueError):
        LineRange(start=4, end=2)


def test_generate_blocks_modify() -> None:
    blocks = DiffGenerator().generate_blocks("a\nb\nc", "a\nx\ny\nc")

    assert len(blocks) == 1
    block = blocks[0]
    assert block.operation == BlockOperation.MODIFY
    assert (block.left_range.start, block.left_range.end) == (1, 2)
    assert (block.right_range.start, block.right_range.end) == (1, 3)


def test_generate_blocks_insert_and_delete() -> None:
    generator = DiffGenerator()

    inserted = generator.generate_blocks("a\nc", "a\nb\nc")
    assert [b.operation for b in inserted] == [BlockOperation.INSERT]
    assert (inserted[0].right_range.start, inserted[0].right_range.end) == (1, 2)

    deleted = generator.generate_blocks("a\nb\nc", "a\nc")
    assert [b.operation for b in deleted] == [BlockOperation.DELETE]
    assert (deleted[0].left_range.start, deleted[0].left_range.end) == (1, 2)


def test_generate_blocks_identical_texts() -> None:
    assert DiffGenerator().generate_blocks("same\ntext", "same\ntext") == []


def test_split_lines_agrees_with_count_lines() -> None:
    generator = DiffGenerator()
    for content in ("", "a", "a\nb\n", "x\n\ny"):
        assert len(generator.split_lines(content)) == count_lines(content)
