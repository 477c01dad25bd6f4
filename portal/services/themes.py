"""Theme preset catalog: named color palettes and hero layouts for one-click styling."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DEFAULT_THEME_KEY = "summer"


class HeroStyle(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class PresetColors(_Frozen):
    primary: str
    secondary: str
    accent: str
    text: str


class PresetHero(_Frozen):
    style: HeroStyle
    gradient_from: str
    gradient_via: str
    gradient_to: str
    # Only presets with a photographic hero background set these.
    overlay_color: Optional[str] = None
    image_url: Optional[str] = None


class ThemePreset(_Frozen):
    key: str
    label: str
    colors: PresetColors
    hero: PresetHero


def _preset(key, label, colors, hero_style, gradient, overlay_color=None, image_url=None) -> ThemePreset:
    primary, secondary, accent, text = colors
    gradient_from, gradient_via, gradient_to = gradient
    return ThemePreset(
        key=key,
        label=label,
        colors=PresetColors(primary=primary, secondary=secondary, accent=accent, text=text),
        hero=PresetHero(
            style=hero_style,
            gradient_from=gradient_from,
            gradient_via=gradient_via,
            gradient_to=gradient_to,
            overlay_color=overlay_color,
            image_url=image_url,
        ),
    )


# Declaration order is the order shown in the admin dashboard.
THEME_PRESETS: tuple[ThemePreset, ...] = (
    _preset(
        "summer", "Summer",
        ("#ef6e2d", "#fdc22c", "#178ab6", "#1e293b"),
        HeroStyle.LIGHT, ("#fff7ed", "#fef3c7", "#ffedd5"),
    ),
    _preset(
        "winter", "Winter",
        ("#2563eb", "#93c5fd", "#0ea5e9", "#0f172a"),
        HeroStyle.LIGHT, ("#f0f9ff", "#e0f2fe", "#f8fafc"),
    ),
    _preset(
        "autumn", "Autumn",
        ("#c2410c", "#d97706", "#7c2d12", "#292524"),
        HeroStyle.LIGHT, ("#fff7ed", "#ffedd5", "#fde68a"),
    ),
    _preset(
        "spring", "Spring",
        ("#16a34a", "#f472b6", "#84cc16", "#1f2937"),
        HeroStyle.LIGHT, ("#f0fdf4", "#fdf2f8", "#ecfccb"),
    ),
    _preset(
        "rainy", "Rainy",
        ("#475569", "#94a3b8", "#0284c7", "#0f172a"),
        HeroStyle.DARK, ("#1e293b", "#334155", "#475569"),
        overlay_color="rgba(15, 23, 42, 0.85)",
        image_url="/images/hero/rainy.jpg",
    ),
    _preset(
        "tropical", "Tropical",
        ("#059669", "#facc15", "#06b6d4", "#064e3b"),
        HeroStyle.DARK, ("#064e3b", "#047857", "#0e7490"),
        overlay_color="rgba(6, 78, 59, 0.8)",
        image_url="/images/hero/tropical.jpg",
    ),
    _preset(
        "sunset", "Sunset",
        ("#e11d48", "#fb923c", "#7c3aed", "#1e1b4b"),
        HeroStyle.LIGHT, ("#fff1f2", "#ffedd5", "#f5f3ff"),
    ),
    _preset(
        "ocean", "Ocean",
        ("#0369a1", "#22d3ee", "#0d9488", "#082f49"),
        HeroStyle.DARK, ("#082f49", "#075985", "#0e7490"),
        overlay_color="rgba(8, 47, 73, 0.85)",
        image_url="/images/hero/ocean.jpg",
    ),
    _preset(
        "dark", "Dark",
        ("#ef6e2d", "#fdc22c", "#178ab6", "#1e293b"),
        HeroStyle.DARK, ("#1e293b", "#334155", "#475569"),
        overlay_color="rgba(30, 41, 59, 0.95)",
    ),
    _preset(
        "light", "Light",
        ("#ef6e2d", "#fdc22c", "#178ab6", "#1e293b"),
        HeroStyle.LIGHT, ("#fff7ed", "#fef3c7", "#ffedd5"),
    ),
)

_PRESETS_BY_KEY: dict[str, ThemePreset] = {p.key: p for p in THEME_PRESETS}
if len(_PRESETS_BY_KEY) != len(THEME_PRESETS):
    raise RuntimeError("Duplicate theme preset key in THEME_PRESETS")


def list_presets() -> list[ThemePreset]:
    """All presets in declaration order."""
    return list(THEME_PRESETS)


def get_preset_by_key(key: str) -> Optional[ThemePreset]:
    """Return the preset with exactly this key (case-sensitive), or None."""
    return _PRESETS_BY_KEY.get(key)


def preset_fields(preset: ThemePreset) -> dict[str, str]:
    """Map a preset onto SiteSettings palette/hero columns. Missing image/overlay become ""."""
    return {
        "theme_key": preset.key,
        "primary_color": preset.colors.primary,
        "secondary_color": preset.colors.secondary,
        "accent_color": preset.colors.accent,
        "text_color": preset.colors.text,
        "hero_style": preset.hero.style.value,
        "hero_gradient_from": preset.hero.gradient_from,
        "hero_gradient_via": preset.hero.gradient_via,
        "hero_gradient_to": preset.hero.gradient_to,
        "hero_image_url": preset.hero.image_url or "",
        "hero_overlay_color": preset.hero.overlay_color or "",
    }
