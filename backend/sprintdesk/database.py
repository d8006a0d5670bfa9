"""Database engines and sessions.

One SQLite file holds the project catalog; every project gets its own file.
Engines are cached per file and created lazily on first access.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from sprintdesk.config import get_settings

logger = logging.getLogger(__name__)


class CatalogBase(DeclarativeBase):
    """Tables stored in the catalog database."""


class ProjectBase(DeclarativeBase):
    """Tables stored in each project database."""


_engines: dict[str, AsyncEngine] = {}
_initialized: set[str] = set()


def _make_engine(path: Path, wal: bool = False) -> AsyncEngine:
    settings = get_settings()
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{path}",
        echo=settings.sqlite_echo,
        poolclass=NullPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        if wal:
            cursor.execute("PRAGMA journal_mode = WAL")
        cursor.close()

    return engine


def resolve_project_path(db_path: str) -> Path:
    """Relative project paths live under the data directory."""
    p = Path(db_path)
    if p.is_absolute():
        return p
    return get_settings().data_dir / p


def _get_engine(path: Path, wal: bool = False) -> AsyncEngine:
    key = str(path.resolve())
    engine = _engines.get(key)
    if engine is None:
        path.parent.mkdir(parents=True, exist_ok=True)
        engine = _make_engine(path, wal=wal)
        _engines[key] = engine
    return engine


def get_catalog_engine() -> AsyncEngine:
    return _get_engine(get_settings().catalog_path)


async def init_db() -> None:
    """Create catalog tables."""
    from sprintdesk.models import project  # noqa: F401

    engine = get_catalog_engine()
    async with engine.begin() as conn:
        await conn.run_sync(CatalogBase.metadata.create_all)
    logger.info("Catalog database ready at %s", get_settings().catalog_path)


async def _seed_statuses(session: AsyncSession) -> None:
    from sprintdesk.models.status import DEFAULT_STATUSES, Status

    count = await session.scalar(select(func.count()).select_from(Status))
    if count:
        return
    for position, (name, color, is_default, is_completed) in enumerate(DEFAULT_STATUSES):
        session.add(Status(
            name=name,
            color=color,
            is_default=is_default,
            is_completed=is_completed,
            position=position,
        ))


async def get_project_engine(db_path: str) -> AsyncEngine:
    """Engine for a project database; schema is created on first access."""
    from sprintdesk import models  # noqa: F401

    path = resolve_project_path(db_path)
    engine = _get_engine(path, wal=True)
    key = str(path.resolve())
    if key not in _initialized:
        async with engine.begin() as conn:
            await conn.run_sync(ProjectBase.metadata.create_all)
        async with async_sessionmaker(engine, expire_on_commit=False)() as session:
            await _seed_statuses(session)
            await session.commit()
        _initialized.add(key)
        logger.info("Project database ready at %s", path)
    return engine


async def dispose_project_engine(db_path: str) -> None:
    key = str(resolve_project_path(db_path).resolve())
    engine = _engines.pop(key, None)
    _initialized.discard(key)
    if engine is not None:
        await engine.dispose()


async def dispose_engines() -> None:
    for engine in _engines.values():
        await engine.dispose()
    _engines.clear()
    _initialized.clear()


@asynccontextmanager
async def _session_scope(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Catalog session for one request."""
    async with _session_scope(get_catalog_engine()) as session:
        yield session


@asynccontextmanager
async def project_session(db_path: str) -> AsyncGenerator[AsyncSession, None]:
    """Project session for one unit of work: commits once at the end, rolls back on error."""
    engine = await get_project_engine(db_path)
    async with _session_scope(engine) as session:
        yield session
