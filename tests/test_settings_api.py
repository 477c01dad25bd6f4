"""Tests for the site settings HTTP API."""
import pytest
from sqlalchemy.exc import OperationalError

from portal.models.site_settings import DEFAULTS
from portal.services.site_settings import SiteSettingsService
from portal.services.themes import get_preset_by_key, list_presets
from web.api.main import app
from web.api.settings_routes import get_settings_service


@pytest.mark.asyncio
async def test_public_settings_defaults(client):
    r = await client.get("/api/settings")
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == 1
    assert data["themeKey"] == "summer"
    assert data["heroHeadline"] == DEFAULTS["hero_headline"]
    assert data["heroImageUrl"] == ""
    assert all(v is not None for v in data.values())
    assert len(data) == len(DEFAULTS) + 1


@pytest.mark.asyncio
async def test_admin_endpoints_require_auth(client):
    assert (await client.get("/api/admin/settings")).status_code == 401
    assert (await client.put("/api/admin/settings", json={"contactPhone": "1"})).status_code == 401
    assert (await client.get("/api/admin/settings/themes")).status_code == 401
    r = await client.post("/api/admin/settings/apply-theme", json={"themeKey": "summer"})
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == "Bearer"

    # Rejected calls changed nothing
    r = await client.get("/api/settings")
    assert r.json()["contactPhone"] == DEFAULTS["contact_phone"]


@pytest.mark.asyncio
async def test_admin_get_settings(client, auth_headers):
    r = await client.get("/api/admin/settings", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == (await client.get("/api/settings")).json()


@pytest.mark.asyncio
async def test_partial_update(client, auth_headers):
    r = await client.put("/api/admin/settings", json={"contactPhone": "+1-555-0100"}, headers=auth_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["contactPhone"] == "+1-555-0100"
    assert data["heroHeadline"] == DEFAULTS["hero_headline"]
    assert data["themeKey"] == "summer"

    r = await client.get("/api/settings")
    assert r.json()["contactPhone"] == "+1-555-0100"


@pytest.mark.asyncio
async def test_partial_update_accepts_snake_case_and_ignores_nulls(client, auth_headers):
    r = await client.put(
        "/api/admin/settings",
        json={"footer_tagline": "Travel to learn", "heroHeadline": None},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["footerTagline"] == "Travel to learn"
    assert r.json()["heroHeadline"] == DEFAULTS["hero_headline"]


@pytest.mark.asyncio
async def test_write_back_round_trip(client, auth_headers):
    await client.put("/api/admin/settings", json={"aboutIntro": "About us"}, headers=auth_headers)
    before = (await client.get("/api/admin/settings", headers=auth_headers)).json()
    r = await client.put("/api/admin/settings", json=before, headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == before


@pytest.mark.asyncio
async def test_partial_update_rejects_non_string(client, auth_headers):
    r = await client.put("/api/admin/settings", json={"primaryColor": 123}, headers=auth_headers)
    assert r.status_code == 422
    r = await client.put("/api/admin/settings", json=["primaryColor"], headers=auth_headers)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_update_store_failure_returns_400(client, auth_headers):
    class FailingService(SiteSettingsService):
        async def update(self, changes):
            raise OperationalError("UPDATE site_settings", {}, Exception("database is locked"))

    app.dependency_overrides[get_settings_service] = lambda: FailingService(None)
    try:
        r = await client.put("/api/admin/settings", json={"contactPhone": "1"}, headers=auth_headers)
    finally:
        app.dependency_overrides.pop(get_settings_service, None)
    assert r.status_code == 400
    assert r.json()["detail"] == "Failed to update settings"


@pytest.mark.asyncio
async def test_theme_catalog(client, auth_headers):
    r = await client.get("/api/admin/settings/themes", headers=auth_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["defaultThemeKey"] == "summer"
    assert [t["key"] for t in data["themes"]] == [p.key for p in list_presets()]
    ocean = next(t for t in data["themes"] if t["key"] == "ocean")
    assert ocean["hero"]["style"] == "dark"
    assert ocean["hero"]["imageUrl"] == "/images/hero/ocean.jpg"


@pytest.mark.asyncio
async def test_apply_theme(client, auth_headers):
    await client.put(
        "/api/admin/settings",
        json={"contactPhone": "+1-555-0100", "heroHeadline": "Go far", "footerTagline": "F", "aboutIntro": "A"},
        headers=auth_headers,
    )
    r = await client.post("/api/admin/settings/apply-theme", json={"themeKey": "summer"}, headers=auth_headers)
    assert r.status_code == 200
    data = r.json()
    summer = get_preset_by_key("summer")
    assert data["themeKey"] == "summer"
    assert data["primaryColor"] == summer.colors.primary
    assert data["secondaryColor"] == summer.colors.secondary
    assert data["accentColor"] == summer.colors.accent
    assert data["textColor"] == summer.colors.text
    assert data["heroStyle"] == "light"
    assert data["heroGradientFrom"] == summer.hero.gradient_from
    assert data["heroGradientVia"] == summer.hero.gradient_via
    assert data["heroGradientTo"] == summer.hero.gradient_to
    assert data["contactPhone"] == "+1-555-0100"
    assert data["heroHeadline"] == "Go far"
    assert data["footerTagline"] == "F"
    assert data["aboutIntro"] == "A"

    again = await client.post("/api/admin/settings/apply-theme", json={"themeKey": "summer"}, headers=auth_headers)
    assert again.json() == data


@pytest.mark.asyncio
async def test_apply_theme_with_image(client, auth_headers):
    r = await client.post("/api/admin/settings/apply-theme", json={"themeKey": "rainy"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["heroImageUrl"] == "/images/hero/rainy.jpg"
    assert r.json()["heroOverlayColor"] == "rgba(15, 23, 42, 0.85)"

    r = await client.post("/api/admin/settings/apply-theme", json={"themeKey": "light"}, headers=auth_headers)
    assert r.json()["heroImageUrl"] == ""
    assert r.json()["heroOverlayColor"] == ""


@pytest.mark.asyncio
async def test_apply_theme_unknown_key(client, auth_headers):
    await client.post("/api/admin/settings/apply-theme", json={"themeKey": "ocean"}, headers=auth_headers)
    before = (await client.get("/api/settings")).json()
    r = await client.post(
        "/api/admin/settings/apply-theme", json={"themeKey": "nonexistent-key"}, headers=auth_headers
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid theme key"
    assert (await client.get("/api/settings")).json() == before


@pytest.mark.asyncio
async def test_apply_theme_missing_key(client, auth_headers):
    r = await client.post("/api/admin/settings/apply-theme", json={}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Theme key is required"

    r = await client.post("/api/admin/settings/apply-theme", json={"themeKey": ""}, headers=auth_headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_apply_theme_malformed(client, auth_headers):
    r = await client.post("/api/admin/settings/apply-theme", json={"themeKey": 7}, headers=auth_headers)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_apply_theme_store_failure_returns_400(client, auth_headers):
    before = (await client.get("/api/settings")).json()

    class FailingService(SiteSettingsService):
        async def apply_preset(self, theme_key):
            raise OperationalError("UPDATE site_settings", {}, Exception("database is locked"))

    app.dependency_overrides[get_settings_service] = lambda: FailingService(None)
    try:
        r = await client.post("/api/admin/settings/apply-theme", json={"themeKey": "winter"}, headers=auth_headers)
    finally:
        app.dependency_overrides.pop(get_settings_service, None)
    assert r.status_code == 400
    assert r.json()["detail"] == "Failed to apply theme"
    assert (await client.get("/api/settings")).json() == before
