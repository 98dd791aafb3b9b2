"""Alignment data models: connector curves, collapsed regions and API payloads"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .diff import DiffBlock, RawHunk


class Side(str, Enum):
    """One of the two compared texts"""

    LEFT = "left"
    RIGHT = "right"

    @property
    def other(self) -> Side:
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class ConnectorKind(str, Enum):
    """Connector flavour, mirrors the block operation"""

    INSERT = "insert"
    DELETE = "delete"
    MODIFY = "modify"


class ConnectorCurve(BaseModel):
    """Geometric description of how one diff block maps between the two sides"""

    model_config = ConfigDict(frozen=True)

    left_start: int
    left_end: int  # inclusive; equals left_start when crushed
    right_start: int
    right_end: int  # inclusive; equals right_start when crushed
    kind: ConnectorKind
    left_crushed: bool
    right_crushed: bool
    block_index: int
    focus_line: int  # anchor of the crushed side, in that side's own rows


class CollapsedRegion(BaseModel):
    """A synchronized pair of hidden unchanged spans, one per side"""

    model_config = ConfigDict(frozen=True)

    region_id: int
    left_start: int
    left_end: int
    right_start: int
    right_end: int
    line_count: int
    expanded: bool = False  # user re-expanded it; kept so it can be collapsed again

    def span(self, side: Side) -> tuple[int, int]:
        if side is Side.LEFT:
            return self.left_start, self.left_end
        return self.right_start, self.right_end


class MapDirection(str, Enum):
    """Direction of a line mapping request"""

    FORWARD = "forward"  # left -> right
    INVERSE = "inverse"  # right -> left


class AlignRequest(BaseModel):
    """Request to align two texts"""

    left_content: str
    right_content: str
    collapse_unchanged: bool | None = None  # falls back to saved settings
    context_lines: int | None = Field(default=None, ge=0)
    minimum_collapse_threshold: int | None = Field(default=None, ge=0)
    expanded_region_ids: list[int] = []


class AlignResponse(BaseModel):
    """Complete alignment of two texts"""

    left_total_lines: int
    right_total_lines: int
    blocks: list[DiffBlock]
    curves: list[ConnectorCurve]
    collapsed_regions: list[CollapsedRegion]
    visible_collapsed_regions: list[CollapsedRegion]


class MapRequest(BaseModel):
    """Request to translate scroll rows from one side to the other"""

    hunks: list[RawHunk]
    left_total_lines: int = Field(ge=0)
    right_total_lines: int = Field(ge=0)
    direction: MapDirection = MapDirection.FORWARD
    lines: list[float]
    half_viewport_rows: float = Field(default=0.0, ge=0)


class MapResponse(BaseModel):
    """Mapped scroll rows, in request order"""

    direction: MapDirection
    lines: list[float]
