"""Tests for the site settings service (store, partial update, preset application)."""
import asyncio

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from portal.models.base import Base
from portal.models.site_settings import DEFAULTS, PALETTE_FIELDS, SINGLETON_ID, SiteSettings
from portal.services.site_settings import SiteSettingsService, UnknownPresetError
from portal.services.themes import get_preset_by_key, preset_fields

COPY_FIELDS = [k for k in DEFAULTS if k not in PALETTE_FIELDS]


@pytest.fixture
async def engine(tmp_path):
    """Separate file-backed database so concurrent sessions use separate connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'settings.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def service(session_factory):
    return SiteSettingsService(session_factory)


async def _row_count(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(SiteSettings))


@pytest.mark.asyncio
async def test_get_creates_defaults(service, session_factory):
    assert await _row_count(session_factory) == 0
    settings = await service.get()
    assert settings.id == SINGLETON_ID
    assert settings.as_dict() == DEFAULTS
    assert all(v is not None for v in settings.as_dict().values())
    assert await _row_count(session_factory) == 1


@pytest.mark.asyncio
async def test_repeated_get_same_record(service, session_factory):
    ids = [(await service.get()).id for _ in range(5)]
    assert ids == [SINGLETON_ID] * 5
    assert await _row_count(session_factory) == 1


@pytest.mark.asyncio
async def test_concurrent_first_reads_create_one_row(service, session_factory):
    results = await asyncio.gather(*(service.get() for _ in range(8)))
    assert {r.id for r in results} == {SINGLETON_ID}
    assert await _row_count(session_factory) == 1


@pytest.mark.asyncio
async def test_update_changes_only_given_fields(service):
    before = (await service.get()).as_dict()
    after = (await service.update({"contact_phone": "+1-555-0100"})).as_dict()
    assert after["contact_phone"] == "+1-555-0100"
    assert after["hero_headline"] == DEFAULTS["hero_headline"]
    assert {k: v for k, v in after.items() if k != "contact_phone"} == {
        k: v for k, v in before.items() if k != "contact_phone"
    }


@pytest.mark.asyncio
async def test_update_before_first_read_creates_row(service, session_factory):
    settings = await service.update({"footer_tagline": "See the world"})
    assert settings.footer_tagline == "See the world"
    assert settings.about_intro == DEFAULTS["about_intro"]
    assert await _row_count(session_factory) == 1


@pytest.mark.asyncio
async def test_update_ignores_none_unknown_and_id(service):
    before = (await service.get()).as_dict()
    settings = await service.update({"hero_headline": None, "bogus": "x", "id": 99})
    assert settings.id == SINGLETON_ID
    assert settings.as_dict() == before


@pytest.mark.asyncio
async def test_update_does_not_validate_colors(service):
    settings = await service.update({"primary_color": "not-a-color"})
    assert settings.primary_color == "not-a-color"


@pytest.mark.asyncio
async def test_manual_edit_keeps_theme_key(service):
    await service.apply_preset("ocean")
    settings = await service.update({"primary_color": "#000000"})
    assert settings.theme_key == "ocean"
    assert settings.primary_color == "#000000"


@pytest.mark.asyncio
async def test_write_back_is_noop(service):
    await service.update({"hero_headline": "Learn abroad", "contact_email": "hi@example.com"})
    before = (await service.get()).as_dict()
    after = (await service.update(before)).as_dict()
    assert after == before


@pytest.mark.asyncio
async def test_apply_preset_sets_palette_and_keeps_copy(service):
    await service.update({
        "contact_phone": "+1-555-0100",
        "hero_headline": "Custom headline",
        "footer_tagline": "Custom footer",
        "about_intro": "Custom about",
    })
    settings = await service.apply_preset("tropical")
    expected = preset_fields(get_preset_by_key("tropical"))
    assert {k: getattr(settings, k) for k in PALETTE_FIELDS} == expected
    assert settings.theme_key == "tropical"
    assert settings.hero_image_url == "/images/hero/tropical.jpg"
    assert settings.contact_phone == "+1-555-0100"
    assert settings.hero_headline == "Custom headline"
    assert settings.footer_tagline == "Custom footer"
    assert settings.about_intro == "Custom about"


@pytest.mark.asyncio
async def test_apply_preset_clears_image_and_overlay(service):
    await service.apply_preset("ocean")
    settings = await service.apply_preset("summer")
    assert settings.theme_key == "summer"
    assert settings.hero_image_url == ""
    assert settings.hero_overlay_color == ""
    assert settings.hero_style == "light"


@pytest.mark.asyncio
async def test_apply_preset_leaves_copy_untouched(service):
    await service.update({k: f"custom {k}" for k in COPY_FIELDS})
    before = (await service.get()).as_dict()
    after = (await service.apply_preset("winter")).as_dict()
    assert {k: after[k] for k in COPY_FIELDS} == {k: before[k] for k in COPY_FIELDS}


@pytest.mark.asyncio
async def test_apply_preset_idempotent(service):
    once = (await service.apply_preset("summer")).as_dict()
    twice = (await service.apply_preset("summer")).as_dict()
    assert once == twice


@pytest.mark.asyncio
async def test_apply_unknown_preset_is_noop(service):
    await service.apply_preset("rainy")
    before = (await service.get()).as_dict()
    with pytest.raises(UnknownPresetError) as exc_info:
        await service.apply_preset("nonexistent-key")
    assert exc_info.value.theme_key == "nonexistent-key"
    assert (await service.get()).as_dict() == before


@pytest.mark.asyncio
async def test_unknown_preset_before_first_read_writes_nothing(service, session_factory):
    with pytest.raises(UnknownPresetError):
        await service.apply_preset("nonexistent-key")
    assert await _row_count(session_factory) == 0


@pytest.mark.asyncio
async def test_failed_write_leaves_settings_unchanged(service, engine):
    await service.update({"contact_phone": "+1-555-0100"})
    await service.apply_preset("ocean")
    before = (await service.get()).as_dict()

    def fail_update(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("UPDATE SITE_SETTINGS"):
            raise OperationalError(statement, parameters, Exception("disk I/O error"))

    event.listen(engine.sync_engine, "before_cursor_execute", fail_update)
    try:
        with pytest.raises(SQLAlchemyError):
            await service.update({"contact_phone": "+44 20 0000 0000", "hero_headline": "Half written"})
        with pytest.raises(SQLAlchemyError):
            await service.apply_preset("winter")
    finally:
        event.remove(engine.sync_engine, "before_cursor_execute", fail_update)

    assert (await service.get()).as_dict() == before
