"""Find-or-create by normalized name.

Import files refer to epics, developers and statuses by name. Names match
case-insensitively after trimming; a name that matches nothing creates a row.
Indexes are loaded once per unit of work, so resolving the same name twice
returns the same row.
"""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sprintdesk.config import get_settings
from sprintdesk.models.developer import Developer
from sprintdesk.models.epic import Epic
from sprintdesk.models.status import Status
from sprintdesk.services.lifecycle import get_default_status


def normalize(name: str | None) -> str:
    return (name or "").strip().casefold()


async def find_status_by_name(db: AsyncSession, name: str) -> Status | None:
    key = normalize(name)
    result = await db.execute(select(Status))
    for status in result.scalars().all():
        if normalize(status.name) == key:
            return status
    return None


class NameResolver:
    """Per-import cache of epics, developers and statuses keyed by normalized name."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()
        self._epics: dict[str, Epic] = {}
        self._developers: dict[str, Developer] = {}
        self._statuses: dict[str, Status] = {}
        self._default_status: Status | None = None
        self._loaded = False

    async def load(self) -> None:
        if self._loaded:
            return
        for epic in (await self.db.execute(select(Epic).order_by(Epic.id))).scalars().all():
            self._epics.setdefault(normalize(epic.name), epic)
        for dev in (await self.db.execute(select(Developer).order_by(Developer.id))).scalars().all():
            self._developers.setdefault(normalize(dev.name), dev)
        for status in (await self.db.execute(select(Status).order_by(Status.id))).scalars().all():
            self._statuses.setdefault(normalize(status.name), status)
        self._default_status = await get_default_status(self.db)
        self._loaded = True

    async def epic(self, name: str | None) -> Epic | None:
        key = normalize(name)
        if not key:
            return None
        await self.load()
        epic = self._epics.get(key)
        if epic is None:
            epic = Epic(name=name.strip(), color=self.settings.default_epic_color)
            self.db.add(epic)
            await self.db.flush()
            self._epics[key] = epic
        return epic

    async def developer(self, name: str | None) -> Developer | None:
        key = normalize(name)
        if not key:
            return None
        await self.load()
        dev = self._developers.get(key)
        if dev is None:
            dev = Developer(name=name.strip())
            self.db.add(dev)
            await self.db.flush()
            self._developers[key] = dev
        return dev

    async def status(self, name: str | None) -> Status:
        """Blank names fall back to the default status."""
        await self.load()
        key = normalize(name)
        if not key:
            return self._default_status
        status = self._statuses.get(key)
        if status is None:
            max_position = await self.db.scalar(select(func.max(Status.position)))
            status = Status(
                name=name.strip(),
                color=self.settings.imported_status_color,
                is_default=False,
                is_completed=False,
                position=(max_position if max_position is not None else -1) + 1,
            )
            self.db.add(status)
            await self.db.flush()
            self._statuses[key] = status
        return status
