"""Diff alignment API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from models.alignment import (
    AlignRequest,
    AlignResponse,
    MapDirection,
    MapRequest,
    MapResponse,
)
from services.config_manager import ConfigManager
from services.connector_builder import build_connector_curves
from services.diff_generator import compute_blocks
from services.diff_session import DiffSession
from services.line_mapper import LineMapper

router = APIRouter()


@router.post("/align", response_model=AlignResponse)
async def align(request: AlignRequest) -> AlignResponse:
    """Diff two texts and return blocks, connector curves and collapsible regions"""
    config_manager = ConfigManager.get_instance()
    settings = config_manager.get_diff_settings()
    collapse = (
        request.collapse_unchanged
        if request.collapse_unchanged is not None
        else settings["collapseUnchanged"]
    )
    context_lines = (
        request.context_lines if request.context_lines is not None else settings["contextLines"]
    )
    min_threshold = (
        request.minimum_collapse_threshold
        if request.minimum_collapse_threshold is not None
        else settings["minimumCollapseThreshold"]
    )

    # Expanding the last folded region turns collapsing off and saves that choice
    session = DiffSession(
        collapse_unchanged=collapse,
        context_lines=context_lines,
        minimum_collapse_threshold=min_threshold,
        on_settings_change=config_manager.set_collapse_unchanged,
    )
    try:
        snapshot = session.update_content(request.left_content, request.right_content)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    planned_ids = {region.region_id for region in session.collapsed_regions()}
    for region_id in request.expanded_region_ids:
        if region_id in planned_ids:
            session.expand_region(region_id)

    return AlignResponse(
        left_total_lines=snapshot.left_total_lines,
        right_total_lines=snapshot.right_total_lines,
        blocks=list(snapshot.blocks),
        curves=list(snapshot.curves),
        collapsed_regions=session.collapsed_regions(),
        visible_collapsed_regions=session.visible_collapsed_regions(),
    )


@router.post("/map", response_model=MapResponse)
async def map_lines(request: MapRequest) -> MapResponse:
    """Translate scroll rows between the two sides of a diff"""
    try:
        blocks = compute_blocks(request.hunks)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    # The caller's viewport is the destination pane's, whichever direction that is
    mapper = LineMapper(
        build_connector_curves(blocks),
        request.left_total_lines,
        request.right_total_lines,
        left_half_viewport=request.half_viewport_rows,
        right_half_viewport=request.half_viewport_rows,
    )
    if request.direction == MapDirection.FORWARD:
        lines = [mapper.forward(line) for line in request.lines]
    else:
        lines = [mapper.inverse(line) for line in request.lines]

    return MapResponse(direction=request.direction, lines=lines)
