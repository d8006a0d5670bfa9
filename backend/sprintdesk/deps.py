"""Request dependencies: catalog lookups and the per-project session."""
from typing import Annotated, AsyncGenerator, TypeVar

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sprintdesk.database import get_db, project_session
from sprintdesk.errors import NotFoundError, ValidationError
from sprintdesk.models.project import Project

T = TypeVar("T")


async def fetch(db: AsyncSession, model: type[T], entity_id: int, label: str) -> T:
    obj = await db.get(model, entity_id)
    if obj is None:
        raise NotFoundError(label, entity_id)
    return obj


async def get_project(
    project_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Project:
    return await fetch(db, Project, project_id, "Project")


async def get_project_db(
    project: Annotated[Project, Depends(get_project)],
) -> AsyncGenerator[AsyncSession, None]:
    async with project_session(project.db_path) as session:
        yield session


ProjectDep = Annotated[Project, Depends(get_project)]
ProjectDb = Annotated[AsyncSession, Depends(get_project_db)]


def required_name(value: str, label: str) -> str:
    """Trimmed name; blank after trimming is refused."""
    value = value.strip()
    if not value:
        raise ValidationError(f"{label} is required")
    return value
