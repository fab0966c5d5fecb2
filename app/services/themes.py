"""Named colour palettes the admin panel can switch between."""

THEME_PRESETS: dict[str, dict[str, str]] = {
    "default": {
        "primaryColor": "#4A00E0",
        "secondaryColor": "#F2C94C",
        "accentTeal": "#2DD4BF",
        "accentPurple": "#8B5CF6",
    },
    "christmas": {
        "primaryColor": "#D42F2F",
        "secondaryColor": "#1D8348",
        "accentTeal": "#58D68D",
        "accentPurple": "#E74C3C",
    },
    "halloween": {
        "primaryColor": "#FF6600",
        "secondaryColor": "#6600CC",
        "accentTeal": "#00CC99",
        "accentPurple": "#990099",
    },
    "summer": {
        "primaryColor": "#1E88E5",
        "secondaryColor": "#FFB300",
        "accentTeal": "#00BFA5",
        "accentPurple": "#FF4081",
    },
}


def normalize_theme_name(value: str | None) -> str:
    return (value or "").strip().lower()


def build_theme_settings(name: str) -> dict[str, str]:
    """Return a ``themeSettings`` value for a preset; ``KeyError`` for unknown names."""
    theme = normalize_theme_name(name)
    colors = THEME_PRESETS[theme]
    return {"currentTheme": theme, **colors}
