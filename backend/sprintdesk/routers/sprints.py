"""Sprint and sprint member API routes."""
from fastapi import APIRouter
from sqlalchemy import delete, select

from sprintdesk.config import get_settings
from sprintdesk.deps import ProjectDb, fetch, required_name
from sprintdesk.errors import ConstraintViolationError, NotFoundError
from sprintdesk.models.developer import Developer
from sprintdesk.models.sprint import Sprint, SprintMember
from sprintdesk.schemas.sprint import (
    SprintCreate,
    SprintMemberResponse,
    SprintMembersUpdate,
    SprintResponse,
    SprintUpdate,
)
from sprintdesk.services.lifecycle import check_sprint_transition, complete_sprint, is_completed_sprint_status
from sprintdesk.services.reports import list_members

router = APIRouter(prefix="/projects/{project_id}/sprints", tags=["sprints"])


def _member_to_schema(m: SprintMember) -> SprintMemberResponse:
    return SprintMemberResponse(
        id=m.id,
        sprint_id=m.sprint_id,
        developer_id=m.developer_id,
        allocation_percent=m.allocation_percent,
        developer_name=m.developer.name,
        developer_email=m.developer.email,
    )


@router.get("", response_model=list[SprintResponse])
async def list_sprints(db: ProjectDb):
    result = await db.execute(select(Sprint).order_by(Sprint.start_date.desc(), Sprint.id.desc()))
    return [SprintResponse.model_validate(s) for s in result.scalars().all()]


@router.post("", response_model=SprintResponse, status_code=201)
async def create_sprint(data: SprintCreate, db: ProjectDb):
    sprint = Sprint(
        name=required_name(data.name, "Sprint name"),
        start_date=data.start_date,
        duration_days=data.duration_days or get_settings().default_sprint_duration_days,
        status=data.status,
    )
    db.add(sprint)
    await db.flush()
    await db.refresh(sprint)
    return SprintResponse.model_validate(sprint)


@router.get("/{sprint_id}", response_model=SprintResponse)
async def get_sprint(sprint_id: int, db: ProjectDb):
    return SprintResponse.model_validate(await fetch(db, Sprint, sprint_id, "Sprint"))


@router.patch("/{sprint_id}", response_model=SprintResponse)
async def update_sprint(sprint_id: int, data: SprintUpdate, db: ProjectDb):
    """Setting status to Completed returns unfinished stories to the backlog."""
    sprint = await fetch(db, Sprint, sprint_id, "Sprint")
    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if "status" in updates:
        check_sprint_transition(sprint.status, updates["status"])
    if "name" in updates:
        updates["name"] = required_name(updates["name"], "Sprint name")
    for k, v in updates.items():
        setattr(sprint, k, v)
    await db.flush()
    if is_completed_sprint_status(updates.get("status")):
        await complete_sprint(db, sprint.id)
    await db.refresh(sprint)
    return SprintResponse.model_validate(sprint)


@router.delete("/{sprint_id}", status_code=204)
async def delete_sprint(sprint_id: int, db: ProjectDb):
    """Stories of the sprint go back to the backlog; allocations are dropped."""
    sprint = await fetch(db, Sprint, sprint_id, "Sprint")
    await db.delete(sprint)
    await db.flush()


@router.get("/{sprint_id}/members", response_model=list[SprintMemberResponse])
async def get_members(sprint_id: int, db: ProjectDb):
    await fetch(db, Sprint, sprint_id, "Sprint")
    return [_member_to_schema(m) for m in await list_members(db, sprint_id)]


@router.put("/{sprint_id}/members", response_model=list[SprintMemberResponse])
async def set_members(sprint_id: int, data: SprintMembersUpdate, db: ProjectDb):
    """Replace the sprint's whole allocation set in one go."""
    await fetch(db, Sprint, sprint_id, "Sprint")
    seen: set[int] = set()
    for m in data.members:
        if m.developer_id in seen:
            raise ConstraintViolationError(f"Developer {m.developer_id} listed twice")
        seen.add(m.developer_id)
        if await db.get(Developer, m.developer_id) is None:
            raise NotFoundError("Developer", m.developer_id)

    await db.execute(delete(SprintMember).where(SprintMember.sprint_id == sprint_id))
    for m in data.members:
        db.add(SprintMember(
            sprint_id=sprint_id,
            developer_id=m.developer_id,
            allocation_percent=m.allocation_percent,
        ))
    await db.flush()
    return [_member_to_schema(m) for m in await list_members(db, sprint_id)]
