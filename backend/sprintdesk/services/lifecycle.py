"""Story lifecycle rules: sprint completion, default status, status deletion."""
import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from sprintdesk.config import get_settings
from sprintdesk.errors import NotFoundError, ValidationError
from sprintdesk.models.sprint import SPRINT_STATUS_TRANSITIONS, SprintStatus
from sprintdesk.models.status import Status
from sprintdesk.models.story import Story

logger = logging.getLogger(__name__)


def check_sprint_transition(old_status: str, new_status: str) -> None:
    """Sprints only move forward: Planning -> Active -> Completed."""
    if old_status == new_status or not get_settings().enforce_sprint_transitions:
        return
    if new_status not in SPRINT_STATUS_TRANSITIONS.get(old_status, []):
        raise ValidationError(f"Invalid sprint status transition from '{old_status}' to '{new_status}'")


async def completed_status_ids(db: AsyncSession) -> list[int]:
    result = await db.execute(select(Status.id).where(Status.is_completed.is_(True)))
    return list(result.scalars().all())


async def completed_status_names(db: AsyncSession) -> set[str]:
    result = await db.execute(select(Status.name).where(Status.is_completed.is_(True)))
    return set(result.scalars().all())


async def complete_sprint(db: AsyncSession, sprint_id: int) -> int:
    """Send every unfinished story of the sprint back to the backlog.

    Stories in a completed status stay. Without any completed status the
    outcome follows ``backlog_all_when_no_completed_status``.
    Returns the number of stories moved.
    """
    done_ids = await completed_status_ids(db)
    q = select(Story.id).where(Story.sprint_id == sprint_id)
    if done_ids:
        q = q.where(Story.status_id.not_in(done_ids))
    elif not get_settings().backlog_all_when_no_completed_status:
        logger.warning("Sprint %s completed with no completed status defined; stories kept", sprint_id)
        return 0
    story_ids = list((await db.execute(q)).scalars().all())
    if story_ids:
        await db.execute(
            update(Story)
            .where(Story.id.in_(story_ids))
            .values(sprint_id=None, updated_at=func.now())
            .execution_options(synchronize_session="fetch")
        )
    logger.info("Sprint %s completed: %d unfinished stories returned to backlog", sprint_id, len(story_ids))
    return len(story_ids)


async def get_default_status(db: AsyncSession) -> Status:
    result = await db.execute(select(Status).where(Status.is_default.is_(True)).order_by(Status.id).limit(1))
    status = result.scalar_one_or_none()
    if not status:
        raise NotFoundError("Default status")
    return status


async def make_default(db: AsyncSession, status: Status) -> None:
    """Clear the flag everywhere, then set it on ``status``."""
    await db.execute(
        update(Status).where(Status.id != status.id).values(is_default=False).execution_options(synchronize_session="fetch")
    )
    status.is_default = True


async def delete_status(db: AsyncSession, status: Status) -> int:
    """Move the status' stories to the default status, then drop it.

    Returns the number of stories reassigned.
    """
    if status.is_default:
        raise ValidationError("Cannot delete the default status")
    default = await get_default_status(db)
    story_ids = list((await db.execute(select(Story.id).where(Story.status_id == status.id))).scalars().all())
    if story_ids:
        await db.execute(
            update(Story)
            .where(Story.id.in_(story_ids))
            .values(status_id=default.id, updated_at=func.now())
            .execution_options(synchronize_session="fetch")
        )
    moved = len(story_ids)
    name = status.name
    await db.delete(status)
    await db.flush()
    logger.info("Status '%s' deleted: %d stories moved to '%s'", name, moved, default.name)
    return moved


def is_completed_sprint_status(value: str | None) -> bool:
    return value == SprintStatus.COMPLETED.value
