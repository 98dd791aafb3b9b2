"""Models module - Pydantic data models"""

from .diff import BlockOperation, DiffBlock, LineRange, RawHunk
from .alignment import (
    AlignRequest,
    AlignResponse,
    CollapsedRegion,
    ConnectorCurve,
    ConnectorKind,
    MapDirection,
    MapRequest,
    MapResponse,
    Side,
)

__all__ = [
    # Diff models
    "BlockOperation",
    "DiffBlock",
    "LineRange",
    "RawHunk",
    # Alignment models
    "CollapsedRegion",
    "ConnectorCurve",
    "ConnectorKind",
    "Side",
    # API models
    "AlignRequest",
    "AlignResponse",
    "MapDirection",
    "MapRequest",
    "MapResponse",
]
