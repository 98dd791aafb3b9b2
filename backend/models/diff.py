"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class BlockOperation(str, Enum):
    """Kind of change a diff block represents"""

    INSERT = "insert"
    DELETE = "delete"
    MODIFY = "modify"


class LineRange(BaseModel):
    """Half-open range of 0-based line indices"""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def check_bounds(self) -> LineRange:
        if self.start < 0:
            raise ValueError(f"line range [{self.start}, {self.end}) starts before line 0")
        if self.end < self.start:
            raise ValueError(f"line range [{self.start}, {self.end}) ends before it starts")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.end == self.start


class RawHunk(BaseModel):
    """A changed line range pair as reported by the diff backend"""

    left_start: int
    left_end: int
    right_start: int
    right_end: int
    tag: str | None = None  # "insert", "delete", "replace"/"modify"; derived when omitted


class DiffBlock(BaseModel):
    """One contiguous change between the left and right texts"""

    model_config = ConfigDict(frozen=True)

    left_range: LineRange
    right_range: LineRange
    operation: BlockOperation
    index: int = 0  # position in the sorted block list

    @model_validator(mode="after")
    def check_operation(self) -> DiffBlock:
        left_empty = self.left_range.is_empty()
        right_empty = self.right_range.is_empty()
        if self.operation == BlockOperation.INSERT and not left_empty:
            raise ValueError(f"insert block #{self.index} has non-empty left range")
        if self.operation == BlockOperation.DELETE and not right_empty:
            raise ValueError(f"delete block #{self.index} has non-empty right range")
        if self.operation == BlockOperation.MODIFY and (left_empty or right_empty):
            raise ValueError(f"modify block #{self.index} needs lines on both sides")
        return self
