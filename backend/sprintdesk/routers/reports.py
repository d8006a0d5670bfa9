"""Sprint statistics, capacity and planning endpoints."""
from fastapi import APIRouter

from sprintdesk.deps import ProjectDb, ProjectDep, fetch
from sprintdesk.models.sprint import Sprint
from sprintdesk.schemas.report import Burndown, ProjectStats, SprintCapacity, SprintPlan, SprintStats
from sprintdesk.services import reports

router = APIRouter(prefix="/projects/{project_id}", tags=["reports"])


@router.get("/stats", response_model=ProjectStats)
async def project_stats(db: ProjectDb):
    return await reports.project_stats(db)


@router.get("/sprints/{sprint_id}/stats", response_model=SprintStats)
async def sprint_stats(sprint_id: int, db: ProjectDb):
    sprint = await fetch(db, Sprint, sprint_id, "Sprint")
    return await reports.sprint_stats(db, sprint)


@router.get("/sprints/{sprint_id}/capacity", response_model=SprintCapacity)
async def sprint_capacity(sprint_id: int, project: ProjectDep, db: ProjectDb):
    sprint = await fetch(db, Sprint, sprint_id, "Sprint")
    return await reports.sprint_capacity(db, project, sprint)


@router.get("/sprints/{sprint_id}/plan", response_model=SprintPlan)
async def sprint_plan(sprint_id: int, project: ProjectDep, db: ProjectDb):
    """Team capacity against the points assigned to each member."""
    sprint = await fetch(db, Sprint, sprint_id, "Sprint")
    return await reports.sprint_plan(db, project, sprint)


@router.get("/sprints/{sprint_id}/burndown", response_model=Burndown)
async def sprint_burndown(sprint_id: int, db: ProjectDb):
    sprint = await fetch(db, Sprint, sprint_id, "Sprint")
    return await reports.sprint_burndown(db, sprint)
