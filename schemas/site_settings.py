from typing import Optional

from schemas.base import CamelModel


class ThemeSettings(CamelModel):
    current_theme: str = "default"
    primary_color: str
    secondary_color: str
    accent_teal: str
    accent_purple: str


class SiteSettingsCreate(CamelModel):
    site_title: Optional[str] = "RENNSZ - Premium Travel Streamer"
    meta_description: Optional[str] = None
    footer_text: Optional[str] = "Made with ❤️ by sf.xen on discord"
    social_links: Optional[dict[str, str]] = None
    theme_settings: Optional[ThemeSettings] = None


class SiteSettingsUpdate(CamelModel):
    site_title: Optional[str] = None
    meta_description: Optional[str] = None
    footer_text: Optional[str] = None
    social_links: Optional[dict[str, str]] = None
    theme_settings: Optional[ThemeSettings] = None


class SiteSettingsResponse(SiteSettingsCreate):
    id: int


class ThemeApplyRequest(CamelModel):
    theme: str


class ThemePreset(CamelModel):
    name: str
    primary_color: str
    secondary_color: str
    accent_teal: str
    accent_purple: str


class ThemeListResponse(CamelModel):
    themes: list[ThemePreset]
