"""Workflow status API routes."""
from fastapi import APIRouter
from sqlalchemy import func, select

from sprintdesk.deps import ProjectDb, fetch, required_name
from sprintdesk.errors import ConstraintViolationError, ValidationError
from sprintdesk.models.status import Status
from sprintdesk.schemas.status import StatusCreate, StatusResponse, StatusUpdate
from sprintdesk.services.lifecycle import delete_status as delete_status_and_reassign
from sprintdesk.services.lifecycle import make_default
from sprintdesk.services.resolver import find_status_by_name

router = APIRouter(prefix="/projects/{project_id}/statuses", tags=["statuses"])


async def _ensure_unique_name(db, name: str, status_id: int | None = None) -> None:
    existing = await find_status_by_name(db, name)
    if existing is not None and existing.id != status_id:
        raise ConstraintViolationError(f"Status '{name}' already exists")


@router.get("", response_model=list[StatusResponse])
async def list_statuses(db: ProjectDb):
    result = await db.execute(select(Status).order_by(Status.position, Status.id))
    return [StatusResponse.model_validate(s) for s in result.scalars().all()]


@router.post("", response_model=StatusResponse, status_code=201)
async def create_status(data: StatusCreate, db: ProjectDb):
    name = required_name(data.name, "Status name")
    await _ensure_unique_name(db, name)
    position = data.position
    if position is None:
        max_position = await db.scalar(select(func.max(Status.position)))
        position = (max_position if max_position is not None else -1) + 1
    status = Status(
        name=name,
        color=data.color,
        is_default=False,
        is_completed=data.is_completed,
        position=position,
    )
    db.add(status)
    await db.flush()
    if data.is_default:
        await make_default(db, status)
        await db.flush()
    return StatusResponse.model_validate(status)


@router.get("/{status_id}", response_model=StatusResponse)
async def get_status(status_id: int, db: ProjectDb):
    return StatusResponse.model_validate(await fetch(db, Status, status_id, "Status"))


@router.patch("/{status_id}", response_model=StatusResponse)
async def update_status(status_id: int, data: StatusUpdate, db: ProjectDb):
    """Renames need no story rewrite: stories point at the status id."""
    status = await fetch(db, Status, status_id, "Status")
    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in updates:
        updates["name"] = required_name(updates["name"], "Status name")
        await _ensure_unique_name(db, updates["name"], status.id)
    is_default = updates.pop("is_default", None)
    if is_default is False and status.is_default:
        raise ValidationError("A project needs a default status; make another status the default instead")
    for k, v in updates.items():
        setattr(status, k, v)
    if is_default:
        await make_default(db, status)
    await db.flush()
    return StatusResponse.model_validate(status)


@router.delete("/{status_id}", status_code=204)
async def delete_status(status_id: int, db: ProjectDb):
    status = await fetch(db, Status, status_id, "Status")
    await delete_status_and_reassign(db, status)
