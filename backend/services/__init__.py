"""Services module - Alignment logic layer"""

from .collapse_planner import collapsed_offset, plan_collapsed_regions, visible_regions
from .config_manager import ConfigManager
from .connector_builder import CurveAnchor, anchor_rows, build_connector_curves
from .diff_generator import DiffBlockError, DiffGenerator, compute_blocks, count_lines
from .diff_session import DiffSession, DiffSnapshot
from .line_mapper import LineMapper, map_forward, map_inverse
from .scroll_sync import ScrollSyncController, ScrollWrite, SyncState

__all__ = [
    "ConfigManager",
    "CurveAnchor",
    "DiffBlockError",
    "DiffGenerator",
    "DiffSession",
    "DiffSnapshot",
    "LineMapper",
    "ScrollSyncController",
    "ScrollWrite",
    "SyncState",
    "anchor_rows",
    "build_connector_curves",
    "collapsed_offset",
    "compute_blocks",
    "count_lines",
    "map_forward",
    "map_inverse",
    "plan_collapsed_regions",
    "visible_regions",
]
