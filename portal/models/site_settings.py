"""Site settings: theme palette, hero section and site copy."""
from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portal.models.base import Base

# The table only ever holds this row.
SINGLETON_ID = 1

# Palette and hero defaults match the "summer" preset.
DEFAULTS = {
    "theme_key": "summer",
    "primary_color": "#ef6e2d",
    "secondary_color": "#fdc22c",
    "accent_color": "#178ab6",
    "text_color": "#1e293b",
    "hero_style": "light",
    "hero_gradient_from": "#fff7ed",
    "hero_gradient_via": "#fef3c7",
    "hero_gradient_to": "#ffedd5",
    "hero_image_url": "",
    "hero_overlay_color": "",
    "hero_headline": "Start Here. Go Anywhere.",
    "hero_subtext": (
        "We guide you through every step of your international education journey, "
        "from university selection to visa approval."
    ),
    "hero_badge_text": "Your Gateway to Global Education",
    "hero_button_primary": "Explore Destinations",
    "hero_button_secondary": "Learn More",
    "contact_phone": "+91 98765 43210",
    "contact_email": "info@eduflyoverseas.com",
    "contact_address": "Chennai, Tamil Nadu, India",
    "footer_tagline": "Your trusted partner for international education.",
    "about_intro": (
        "Edufly Overseas is a premier international education consultancy dedicated "
        "to helping students achieve their dreams of studying abroad."
    ),
}

# Fields a preset overwrites; everything else in DEFAULTS is site copy.
PALETTE_FIELDS = (
    "theme_key",
    "primary_color",
    "secondary_color",
    "accent_color",
    "text_color",
    "hero_style",
    "hero_gradient_from",
    "hero_gradient_via",
    "hero_gradient_to",
    "hero_image_url",
    "hero_overlay_color",
)


def _text(name: str, length: int | None = 64) -> Mapped[str]:
    column_type = String(length) if length else Text
    return mapped_column(column_type, nullable=False, default=DEFAULTS[name])


class SiteSettings(Base):
    """Singleton site customization record (id is always SINGLETON_ID)."""

    __tablename__ = "site_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    theme_key: Mapped[str] = _text("theme_key")
    primary_color: Mapped[str] = _text("primary_color")
    secondary_color: Mapped[str] = _text("secondary_color")
    accent_color: Mapped[str] = _text("accent_color")
    text_color: Mapped[str] = _text("text_color")

    hero_style: Mapped[str] = _text("hero_style", 16)  # light, dark
    hero_gradient_from: Mapped[str] = _text("hero_gradient_from")
    hero_gradient_via: Mapped[str] = _text("hero_gradient_via")
    hero_gradient_to: Mapped[str] = _text("hero_gradient_to")
    hero_image_url: Mapped[str] = _text("hero_image_url", None)
    hero_overlay_color: Mapped[str] = _text("hero_overlay_color")
    hero_headline: Mapped[str] = _text("hero_headline", None)
    hero_subtext: Mapped[str] = _text("hero_subtext", None)
    hero_badge_text: Mapped[str] = _text("hero_badge_text", None)
    hero_button_primary: Mapped[str] = _text("hero_button_primary", 128)
    hero_button_secondary: Mapped[str] = _text("hero_button_secondary", 128)

    contact_phone: Mapped[str] = _text("contact_phone")
    contact_email: Mapped[str] = _text("contact_email", 255)
    contact_address: Mapped[str] = _text("contact_address", None)
    footer_tagline: Mapped[str] = _text("footer_tagline", None)
    about_intro: Mapped[str] = _text("about_intro", None)

    def as_dict(self) -> dict[str, str]:
        """All setting fields (without id)."""
        return {name: getattr(self, name) for name in DEFAULTS}
