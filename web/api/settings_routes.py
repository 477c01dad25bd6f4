"""Site settings API: theme, hero section and site copy (public read, admin write)."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError

from portal.models import Admin
from portal.models.base import async_session_factory
from portal.services.site_settings import SiteSettingsService, UnknownPresetError
from portal.services.themes import DEFAULT_THEME_KEY, ThemePreset, list_presets
from web.auth import require_admin_user

logger = logging.getLogger("edufly.settings")

router = APIRouter(prefix="/api", tags=["settings"])

settings_service = SiteSettingsService(async_session_factory)


def get_settings_service() -> SiteSettingsService:
    return settings_service


class _CamelModel(BaseModel):
    """JSON uses camelCase (themeKey); snake_case is accepted on input too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SettingsResponse(_CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    theme_key: str
    primary_color: str
    secondary_color: str
    accent_color: str
    text_color: str
    hero_style: str
    hero_gradient_from: str
    hero_gradient_via: str
    hero_gradient_to: str
    hero_image_url: str
    hero_overlay_color: str
    hero_headline: str
    hero_subtext: str
    hero_badge_text: str
    hero_button_primary: str
    hero_button_secondary: str
    contact_phone: str
    contact_email: str
    contact_address: str
    footer_tagline: str
    about_intro: str


class SettingsUpdate(_CamelModel):
    """Partial update. Omitted or null fields keep their current value; unknown fields (e.g. id) are ignored."""

    theme_key: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    text_color: Optional[str] = None
    hero_style: Optional[str] = None
    hero_gradient_from: Optional[str] = None
    hero_gradient_via: Optional[str] = None
    hero_gradient_to: Optional[str] = None
    hero_image_url: Optional[str] = None
    hero_overlay_color: Optional[str] = None
    hero_headline: Optional[str] = None
    hero_subtext: Optional[str] = None
    hero_badge_text: Optional[str] = None
    hero_button_primary: Optional[str] = None
    hero_button_secondary: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    contact_address: Optional[str] = None
    footer_tagline: Optional[str] = None
    about_intro: Optional[str] = None


class ApplyThemeRequest(_CamelModel):
    theme_key: Optional[str] = None


class ThemeCatalogResponse(_CamelModel):
    default_theme_key: str
    themes: list[ThemePreset]


@router.get("/settings", response_model=SettingsResponse)
async def get_settings(service: SiteSettingsService = Depends(get_settings_service)):
    """Get site settings (public, drives theming and copy)."""
    return await service.get()


@router.get("/admin/settings", response_model=SettingsResponse)
async def get_admin_settings(
    admin: Admin = Depends(require_admin_user),
    service: SiteSettingsService = Depends(get_settings_service),
):
    """Get site settings (admin only)."""
    return await service.get()


@router.put("/admin/settings", response_model=SettingsResponse)
async def update_settings(
    body: SettingsUpdate,
    admin: Admin = Depends(require_admin_user),
    service: SiteSettingsService = Depends(get_settings_service),
):
    """Update any subset of site settings (admin only). Does not change themeKey unless given."""
    try:
        return await service.update(body.model_dump(exclude_unset=True))
    except SQLAlchemyError as e:
        logger.exception("Failed to update settings")
        raise HTTPException(400, "Failed to update settings") from e


@router.get("/admin/settings/themes", response_model=ThemeCatalogResponse)
async def get_theme_presets(admin: Admin = Depends(require_admin_user)):
    """List theme presets in display order (admin only)."""
    return ThemeCatalogResponse(default_theme_key=DEFAULT_THEME_KEY, themes=list_presets())


@router.post("/admin/settings/apply-theme", response_model=SettingsResponse)
async def apply_theme(
    body: ApplyThemeRequest,
    admin: Admin = Depends(require_admin_user),
    service: SiteSettingsService = Depends(get_settings_service),
):
    """Apply a theme preset's palette and hero styling (admin only)."""
    if not body.theme_key:
        raise HTTPException(400, "Theme key is required")
    try:
        return await service.apply_preset(body.theme_key)
    except UnknownPresetError as e:
        raise HTTPException(400, "Invalid theme key") from e
    except SQLAlchemyError as e:
        logger.exception("Failed to apply theme %s", body.theme_key)
        raise HTTPException(400, "Failed to apply theme") from e
