"""Developer API routes."""
from fastapi import APIRouter
from sqlalchemy import select

from sprintdesk.deps import ProjectDb, fetch, required_name
from sprintdesk.models.developer import Developer
from sprintdesk.schemas.developer import DeveloperCreate, DeveloperResponse, DeveloperUpdate

router = APIRouter(prefix="/projects/{project_id}/developers", tags=["developers"])


@router.get("", response_model=list[DeveloperResponse])
async def list_developers(db: ProjectDb):
    result = await db.execute(select(Developer).order_by(Developer.name, Developer.id))
    return [DeveloperResponse.model_validate(d) for d in result.scalars().all()]


@router.post("", response_model=DeveloperResponse, status_code=201)
async def create_developer(data: DeveloperCreate, db: ProjectDb):
    developer = Developer(name=required_name(data.name, "Developer name"), email=data.email or None)
    db.add(developer)
    await db.flush()
    await db.refresh(developer)
    return DeveloperResponse.model_validate(developer)


@router.get("/{developer_id}", response_model=DeveloperResponse)
async def get_developer(developer_id: int, db: ProjectDb):
    return DeveloperResponse.model_validate(await fetch(db, Developer, developer_id, "Developer"))


@router.patch("/{developer_id}", response_model=DeveloperResponse)
async def update_developer(developer_id: int, data: DeveloperUpdate, db: ProjectDb):
    developer = await fetch(db, Developer, developer_id, "Developer")
    updates = data.model_dump(exclude_unset=True)
    if updates.get("name") is not None:
        developer.name = required_name(updates["name"], "Developer name")
    if "email" in updates:
        developer.email = updates["email"] or None
    await db.flush()
    await db.refresh(developer)
    return DeveloperResponse.model_validate(developer)


@router.delete("/{developer_id}", status_code=204)
async def delete_developer(developer_id: int, db: ProjectDb):
    """Stories keep existing with no assignee; sprint allocations go."""
    developer = await fetch(db, Developer, developer_id, "Developer")
    await db.delete(developer)
    await db.flush()
