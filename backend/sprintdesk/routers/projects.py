"""Project catalog API routes."""
import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprintdesk.config import get_settings
from sprintdesk.database import dispose_project_engine, get_db, get_project_engine, resolve_project_path
from sprintdesk.deps import fetch, required_name
from sprintdesk.errors import ConstraintViolationError
from sprintdesk.models.project import Project
from sprintdesk.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


def default_db_path(name: str) -> str:
    return re.sub(r"\s+", "_", name.strip().lower()) + ".db"


async def _ensure_unique_name(db: AsyncSession, name: str, project_id: int | None = None) -> None:
    q = select(Project).where(Project.name == name)
    if project_id is not None:
        q = q.where(Project.id != project_id)
    if (await db.execute(q)).scalar_one_or_none():
        raise ConstraintViolationError("Project name already exists")


@router.get("", response_model=list[ProjectResponse])
async def list_projects(db: Annotated[AsyncSession, Depends(get_db)]):
    result = await db.execute(select(Project).order_by(Project.updated_at.desc(), Project.id.desc()))
    return [ProjectResponse.model_validate(p) for p in result.scalars().all()]


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    data: ProjectCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    settings = get_settings()
    name = required_name(data.name, "Project name")
    await _ensure_unique_name(db, name)
    db_path = data.db_path or default_db_path(name)
    if (await db.execute(select(Project).where(Project.db_path == db_path))).scalar_one_or_none():
        raise ConstraintViolationError(f"Database {db_path} already belongs to another project")
    project = Project(
        name=name,
        db_path=db_path,
        story_point_hours=data.story_point_hours or settings.default_story_point_hours,
        daily_hours=data.daily_hours or settings.default_daily_hours,
    )
    db.add(project)
    await db.flush()
    await db.refresh(project)
    # Create the project's own database up front so the file exists before first use
    await get_project_engine(project.db_path)
    logger.info("Created project %s (%s)", project.name, project.db_path)
    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    project = await fetch(db, Project, project_id, "Project")
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    data: ProjectUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    project = await fetch(db, Project, project_id, "Project")
    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in updates:
        updates["name"] = required_name(updates["name"], "Project name")
        await _ensure_unique_name(db, updates["name"], project.id)
    for k, v in updates.items():
        setattr(project, k, v)
    await db.flush()
    await db.refresh(project)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    project = await fetch(db, Project, project_id, "Project")
    db_path = project.db_path
    await db.delete(project)
    await db.flush()
    await dispose_project_engine(db_path)
    path = resolve_project_path(db_path)
    for suffix in ("", "-wal", "-shm"):
        f = path.with_name(path.name + suffix)
        if f.exists():
            f.unlink()
    logger.info("Deleted project %s and its database %s", project_id, path)
