"""Site settings store: read, partial update and theme preset application.

The settings table holds a single row (``SINGLETON_ID``). It is created with
defaults on first access and every write is one ``UPDATE`` in one transaction,
so readers see either the old or the new values of a call, never a mix.
Concurrent writers are last-writer-wins.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import insert, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portal.models.site_settings import DEFAULTS, SINGLETON_ID, SiteSettings
from portal.services.themes import get_preset_by_key, preset_fields

logger = logging.getLogger("edufly.settings")

SETTING_FIELDS = tuple(DEFAULTS)


class UnknownPresetError(LookupError):
    """No theme preset has the requested key."""

    def __init__(self, theme_key: str):
        super().__init__(f"Unknown theme preset: {theme_key!r}")
        self.theme_key = theme_key


async def _insert_defaults(session: AsyncSession) -> None:
    """Create the singleton row with defaults unless it already exists."""
    values = {"id": SINGLETON_ID, **DEFAULTS}
    dialect = session.get_bind().dialect.name
    if dialect == "sqlite":
        stmt = sqlite_insert(SiteSettings).values(**values).on_conflict_do_nothing(index_elements=["id"])
    elif dialect == "postgresql":
        stmt = pg_insert(SiteSettings).values(**values).on_conflict_do_nothing(index_elements=["id"])
    else:
        try:
            async with session.begin_nested():
                await session.execute(insert(SiteSettings).values(**values))
        except IntegrityError:
            pass  # Another request created it first
        return
    await session.execute(stmt)


class SiteSettingsService:
    """Owns the singleton SiteSettings row. Create one per process."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self) -> SiteSettings:
        """Return the settings, creating the row with defaults on first access."""
        async with self._session_factory() as session:
            row = await session.get(SiteSettings, SINGLETON_ID)
            if row is None:
                await _insert_defaults(session)
                await session.commit()
                row = await session.get(SiteSettings, SINGLETON_ID)
                logger.info("Created default site settings")
            return row

    async def update(self, changes: Mapping[str, Any]) -> SiteSettings:
        """Overwrite only the supplied fields. Unknown keys and None values are ignored."""
        values = {k: v for k, v in changes.items() if k in DEFAULTS and v is not None}
        if not values:
            return await self.get()
        row = await self._write(values)
        logger.info("Updated site settings: %s", ", ".join(sorted(values)))
        return row

    async def apply_preset(self, theme_key: str) -> SiteSettings:
        """Overwrite palette and hero styling from a catalog preset. Site copy is untouched.

        Raises UnknownPresetError (before any write) if the key is not in the catalog.
        """
        preset = get_preset_by_key(theme_key)
        if preset is None:
            raise UnknownPresetError(theme_key)
        row = await self._write(preset_fields(preset))
        logger.info("Applied theme preset %s", preset.key)
        return row

    async def _write(self, values: dict[str, Any]) -> SiteSettings:
        async with self._session_factory() as session:
            await _insert_defaults(session)
            await session.execute(
                update(SiteSettings).where(SiteSettings.id == SINGLETON_ID).values(**values)
            )
            await session.commit()
            return await session.get(SiteSettings, SINGLETON_ID)
