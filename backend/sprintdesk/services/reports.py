"""Sprint and project reports built from the engine functions."""
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprintdesk.config import get_settings
from sprintdesk.engine.capacity import individual_capacity, team_capacity
from sprintdesk.engine.statistics import aggregate, burndown, facts_from_story, percent
from sprintdesk.models.project import Project
from sprintdesk.models.sprint import Sprint, SprintMember
from sprintdesk.models.story import Story
from sprintdesk.schemas.report import (
    Burndown,
    MemberCapacity,
    MemberPlan,
    ProjectStats,
    SprintCapacity,
    SprintPlan,
    SprintRollup,
    SprintStats,
)
from sprintdesk.services.lifecycle import completed_status_names


async def list_stories(
    db: AsyncSession,
    sprint_id: int | None = None,
    epic_id: int | None = None,
    status_id: int | None = None,
    backlog: bool = False,
) -> list[Story]:
    """Stories newest first, with epic, assignee and status joined."""
    q = select(Story).order_by(Story.created_at.desc(), Story.id.desc()).execution_options(populate_existing=True)
    if backlog:
        q = q.where(Story.sprint_id.is_(None))
    if sprint_id is not None:
        q = q.where(Story.sprint_id == sprint_id)
    if epic_id is not None:
        q = q.where(Story.epic_id == epic_id)
    if status_id is not None:
        q = q.where(Story.status_id == status_id)
    result = await db.execute(q)
    return list(result.unique().scalars().all())


async def list_members(db: AsyncSession, sprint_id: int) -> list[SprintMember]:
    result = await db.execute(
        select(SprintMember)
        .where(SprintMember.sprint_id == sprint_id)
        .order_by(SprintMember.id)
        .execution_options(populate_existing=True)
    )
    return list(result.unique().scalars().all())


async def sprint_stats(db: AsyncSession, sprint: Sprint) -> SprintStats:
    # Rollup keys appear in creation order
    stories = sorted(await list_stories(db, sprint_id=sprint.id), key=lambda s: s.id)
    done = await completed_status_names(db)
    return aggregate(
        (facts_from_story(s) for s in stories),
        done,
        no_epic_color=get_settings().no_epic_color,
    )


async def project_stats(db: AsyncSession) -> ProjectStats:
    """Whole-project rollup plus one line per sprint and the backlog totals."""
    settings = get_settings()
    stories = sorted(await list_stories(db), key=lambda s: s.id)
    done = await completed_status_names(db)
    overall = aggregate((facts_from_story(s) for s in stories), done, no_epic_color=settings.no_epic_color)

    sprints = (await db.execute(select(Sprint).order_by(Sprint.start_date.desc(), Sprint.id.desc()))).scalars().all()
    rollups = []
    for sprint in sprints:
        in_sprint = [s for s in stories if s.sprint_id == sprint.id]
        total = sum(s.story_points or 0.0 for s in in_sprint)
        completed = sum(s.story_points or 0.0 for s in in_sprint if s.status.name in done)
        rollups.append(SprintRollup(
            sprint_id=sprint.id,
            sprint_name=sprint.name,
            status=sprint.status,
            story_count=len(in_sprint),
            total_points=total,
            completed_points=completed,
            completion_percent=percent(completed, total),
        ))

    backlog = [s for s in stories if s.sprint_id is None]
    return ProjectStats(
        **overall.model_dump(),
        backlog_points=sum(s.story_points or 0.0 for s in backlog),
        backlog_count=len(backlog),
        sprint_stats=rollups,
    )


async def sprint_capacity(db: AsyncSession, project: Project, sprint: Sprint) -> SprintCapacity:
    members = await list_members(db, sprint.id)
    return SprintCapacity(
        duration_days=sprint.duration_days,
        daily_hours=project.daily_hours,
        story_point_hours=project.story_point_hours,
        members=[
            MemberCapacity(
                developer_id=m.developer_id,
                name=m.developer.name,
                allocation_percent=m.allocation_percent,
                capacity=individual_capacity(
                    sprint.duration_days, project.daily_hours, m.allocation_percent, project.story_point_hours
                ),
            )
            for m in members
        ],
        team_capacity=team_capacity(sprint.duration_days, project.daily_hours, project.story_point_hours, members),
    )


async def sprint_plan(db: AsyncSession, project: Project, sprint: Sprint) -> SprintPlan:
    """Capacity against assigned points, per member.

    Stories whose assignee is not a sprint member count as unassigned.
    """
    capacity = await sprint_capacity(db, project, sprint)
    stories = await list_stories(db, sprint_id=sprint.id)
    by_member = {m.developer_id: [] for m in capacity.members}
    unassigned = []
    for s in stories:
        if s.assignee_id is not None and s.assignee_id in by_member:
            by_member[s.assignee_id].append(s)
        else:
            unassigned.append(s)

    plans = []
    for m in capacity.members:
        assigned = by_member[m.developer_id]
        assigned_points = sum(s.story_points or 0.0 for s in assigned)
        plans.append(MemberPlan(
            **m.model_dump(),
            assigned_points=assigned_points,
            story_count=len(assigned),
            load_percent=min(100, percent(assigned_points, m.capacity)),
            story_ids=[s.id for s in assigned],
        ))

    total_points = sum(s.story_points or 0.0 for s in stories)
    return SprintPlan(
        sprint_id=sprint.id,
        sprint_name=sprint.name,
        total_stories=len(stories),
        total_points=total_points,
        team_capacity=capacity.team_capacity,
        capacity_used_percent=percent(total_points, capacity.team_capacity),
        members=plans,
        unassigned_story_ids=[s.id for s in unassigned],
    )


async def sprint_burndown(db: AsyncSession, sprint: Sprint, today: date | None = None) -> Burndown:
    stats = await sprint_stats(db, sprint)
    elapsed, points = burndown(
        stats.total_points,
        stats.completed_points,
        sprint.duration_days,
        sprint.start_date,
        today or date.today(),
    )
    return Burndown(
        total_points=stats.total_points,
        completed_points=stats.completed_points,
        elapsed_days=elapsed,
        points=points,
    )
