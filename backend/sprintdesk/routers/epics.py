"""Epic API routes."""
from fastapi import APIRouter
from sqlalchemy import select

from sprintdesk.config import get_settings
from sprintdesk.deps import ProjectDb, fetch, required_name
from sprintdesk.models.epic import Epic
from sprintdesk.schemas.epic import EpicCreate, EpicResponse, EpicUpdate

router = APIRouter(prefix="/projects/{project_id}/epics", tags=["epics"])


@router.get("", response_model=list[EpicResponse])
async def list_epics(db: ProjectDb):
    result = await db.execute(select(Epic).order_by(Epic.name, Epic.id))
    return [EpicResponse.model_validate(e) for e in result.scalars().all()]


@router.post("", response_model=EpicResponse, status_code=201)
async def create_epic(data: EpicCreate, db: ProjectDb):
    epic = Epic(
        name=required_name(data.name, "Epic name"),
        description=data.description,
        color=data.color or get_settings().default_epic_color,
    )
    db.add(epic)
    await db.flush()
    return EpicResponse.model_validate(epic)


@router.get("/{epic_id}", response_model=EpicResponse)
async def get_epic(epic_id: int, db: ProjectDb):
    return EpicResponse.model_validate(await fetch(db, Epic, epic_id, "Epic"))


@router.patch("/{epic_id}", response_model=EpicResponse)
async def update_epic(epic_id: int, data: EpicUpdate, db: ProjectDb):
    epic = await fetch(db, Epic, epic_id, "Epic")
    updates = data.model_dump(exclude_unset=True)
    if updates.get("name") is not None:
        epic.name = required_name(updates["name"], "Epic name")
    if "description" in updates:
        epic.description = updates["description"]
    if updates.get("color"):
        epic.color = updates["color"]
    await db.flush()
    return EpicResponse.model_validate(epic)


@router.delete("/{epic_id}", status_code=204)
async def delete_epic(epic_id: int, db: ProjectDb):
    """Stories of the epic stay, with no epic."""
    epic = await fetch(db, Epic, epic_id, "Epic")
    await db.delete(epic)
    await db.flush()
