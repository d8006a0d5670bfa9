"""Story API routes."""
from fastapi import APIRouter, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprintdesk.deps import ProjectDb, fetch, required_name
from sprintdesk.errors import NotFoundError
from sprintdesk.models.developer import Developer
from sprintdesk.models.epic import Epic
from sprintdesk.models.sprint import Sprint
from sprintdesk.models.status import Status
from sprintdesk.models.story import Story
from sprintdesk.schemas.story import StoryAssign, StoryCreate, StoryResponse, StoryUpdate
from sprintdesk.services.lifecycle import get_default_status
from sprintdesk.services.reports import list_stories
from sprintdesk.services.resolver import find_status_by_name

router = APIRouter(prefix="/projects/{project_id}/stories", tags=["stories"])


def story_to_schema(s: Story) -> StoryResponse:
    return StoryResponse(
        id=s.id,
        title=s.title,
        description=s.description,
        story_points=s.story_points,
        epic_id=s.epic_id,
        assignee_id=s.assignee_id,
        sprint_id=s.sprint_id,
        status_id=s.status_id,
        status=s.status.name,
        created_at=s.created_at,
        updated_at=s.updated_at,
        epic_name=s.epic.name if s.epic else None,
        epic_color=s.epic.color if s.epic else None,
        assignee_name=s.assignee.name if s.assignee else None,
    )


async def _load_story(db: AsyncSession, story_id: int) -> Story:
    result = await db.execute(
        select(Story).where(Story.id == story_id).execution_options(populate_existing=True)
    )
    story = result.unique().scalar_one_or_none()
    if not story:
        raise NotFoundError("Story", story_id)
    return story


async def _resolve_status(db: AsyncSession, status_id: int | None, name: str | None) -> Status | None:
    """Status by id, else by case-insensitive name; None when neither is given."""
    if status_id is not None:
        return await fetch(db, Status, status_id, "Status")
    if name is not None and name.strip():
        status = await find_status_by_name(db, name)
        if status is None:
            raise NotFoundError("Status", name)
        return status
    return None


async def _check_refs(db: AsyncSession, values: dict) -> None:
    refs = (("epic_id", Epic, "Epic"), ("assignee_id", Developer, "Developer"), ("sprint_id", Sprint, "Sprint"))
    for field, model, label in refs:
        if values.get(field) is not None:
            await fetch(db, model, values[field], label)


@router.get("", response_model=list[StoryResponse])
async def list_all(
    db: ProjectDb,
    sprint_id: int | None = Query(None),
    epic_id: int | None = Query(None),
    status_id: int | None = Query(None),
    backlog: bool = Query(False),
):
    stories = await list_stories(db, sprint_id=sprint_id, epic_id=epic_id, status_id=status_id, backlog=backlog)
    return [story_to_schema(s) for s in stories]


@router.post("", response_model=StoryResponse, status_code=201)
async def create_story(data: StoryCreate, db: ProjectDb):
    await _check_refs(db, data.model_dump())
    status = await _resolve_status(db, data.status_id, data.status) or await get_default_status(db)
    story = Story(
        title=required_name(data.title, "Story title"),
        description=data.description,
        story_points=data.story_points,
        epic_id=data.epic_id,
        assignee_id=data.assignee_id,
        sprint_id=data.sprint_id,
        status_id=status.id,
    )
    db.add(story)
    await db.flush()
    return story_to_schema(await _load_story(db, story.id))


@router.get("/{story_id}", response_model=StoryResponse)
async def get_story(story_id: int, db: ProjectDb):
    return story_to_schema(await _load_story(db, story_id))


@router.patch("/{story_id}", response_model=StoryResponse)
async def update_story(story_id: int, data: StoryUpdate, db: ProjectDb):
    """Fields left out stay; epic, assignee and sprint may be cleared with null."""
    story = await _load_story(db, story_id)
    updates = data.model_dump(exclude_unset=True)
    await _check_refs(db, updates)
    status = await _resolve_status(db, updates.pop("status_id", None), updates.pop("status", None))
    if status is not None:
        story.status_id = status.id
    if updates.get("title") is not None:
        story.title = required_name(updates["title"], "Story title")
    for field in ("description", "story_points", "epic_id", "assignee_id", "sprint_id"):
        if field in updates:
            setattr(story, field, updates[field])
    await db.flush()
    return story_to_schema(await _load_story(db, story.id))


@router.delete("/{story_id}", status_code=204)
async def delete_story(story_id: int, db: ProjectDb):
    story = await fetch(db, Story, story_id, "Story")
    await db.delete(story)
    await db.flush()


@router.post("/{story_id}/assign", response_model=StoryResponse)
async def assign_story(story_id: int, data: StoryAssign, db: ProjectDb):
    story = await _load_story(db, story_id)
    await fetch(db, Sprint, data.sprint_id, "Sprint")
    story.sprint_id = data.sprint_id
    await db.flush()
    return story_to_schema(await _load_story(db, story.id))


@router.post("/{story_id}/unassign", response_model=StoryResponse)
async def unassign_story(story_id: int, db: ProjectDb):
    story = await _load_story(db, story_id)
    story.sprint_id = None
    await db.flush()
    return story_to_schema(await _load_story(db, story.id))
