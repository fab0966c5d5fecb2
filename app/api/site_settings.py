from fastapi import APIRouter, Depends, HTTPException

from app.security import get_storage
from app.services.themes import THEME_PRESETS, build_theme_settings
from app.storage.base import Storage
from schemas.site_settings import (
    SiteSettingsResponse,
    SiteSettingsUpdate,
    ThemeApplyRequest,
    ThemeListResponse,
    ThemePreset,
)

router = APIRouter()
admin_router = APIRouter()


def _settings_patch(payload: SiteSettingsUpdate) -> dict:
    data = payload.model_dump(exclude_unset=True)
    # JSON columns keep the client's camelCase keys
    if payload.theme_settings is not None:
        data["theme_settings"] = payload.theme_settings.model_dump(by_alias=True)
    return data


@router.get("/site-settings", response_model=SiteSettingsResponse)
async def get_site_settings(storage: Storage = Depends(get_storage)):
    row = await storage.get_site_settings()
    if not row:
        raise HTTPException(status_code=404, detail="Site settings not found")
    return row


@router.get("/themes", response_model=ThemeListResponse)
async def list_themes():
    return ThemeListResponse(themes=[
        ThemePreset(name=name, **colors) for name, colors in THEME_PRESETS.items()
    ])


@admin_router.put("/site-settings", response_model=SiteSettingsResponse)
async def update_site_settings(payload: SiteSettingsUpdate, storage: Storage = Depends(get_storage)):
    row = await storage.update_site_settings(_settings_patch(payload))
    if not row:
        raise HTTPException(status_code=404, detail="Site settings not found")
    return row


@admin_router.put("/site-settings/theme", response_model=SiteSettingsResponse)
async def apply_theme(payload: ThemeApplyRequest, storage: Storage = Depends(get_storage)):
    try:
        theme_settings = build_theme_settings(payload.theme)
    except KeyError:
        raise HTTPException(status_code=400, detail=f"Unknown theme: {payload.theme}")
    row = await storage.update_site_settings({"theme_settings": theme_settings})
    if not row:
        raise HTTPException(status_code=404, detail="Site settings not found")
    return row
