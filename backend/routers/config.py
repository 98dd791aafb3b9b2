"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from services.config_manager import ConfigManager

router = APIRouter()


class DiffSettingsUpdateRequest(BaseModel):
    """Request to update diff viewer settings"""

    collapseUnchanged: bool | None = None
    contextLines: int | None = Field(default=None, ge=0)
    minimumCollapseThreshold: int | None = Field(default=None, ge=0)


class DiffSettingsResponse(BaseModel):
    """Diff viewer settings response"""

    collapseUnchanged: bool
    contextLines: int
    minimumCollapseThreshold: int


@router.get("", response_model=DiffSettingsResponse)
async def get_config() -> DiffSettingsResponse:
    """Get current diff viewer settings"""
    settings = ConfigManager.get_instance().get_diff_settings()
    return DiffSettingsResponse(**settings)


@router.put("")
async def update_config(request: DiffSettingsUpdateRequest) -> dict[str, Any]:
    """Update diff viewer settings"""
    config_manager = ConfigManager.get_instance()
    settings = config_manager.get_diff_settings()

    # Update only provided fields
    settings.update(request.model_dump(exclude_none=True))
    config_manager.save_config({"diff": settings})

    return {"status": "success", "message": "Configuration updated"}
