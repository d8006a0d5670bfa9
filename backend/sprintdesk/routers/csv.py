"""CSV import and export routes."""
import re
from typing import Annotated

from fastapi import APIRouter, File, Response, UploadFile

from sprintdesk.deps import ProjectDb, fetch
from sprintdesk.models.sprint import Sprint
from sprintdesk.schemas.report import ImportResult, StatusImportResult
from sprintdesk.services.csv_import import import_status_updates, import_stories, stories_to_csv
from sprintdesk.services.reports import list_stories

router = APIRouter(prefix="/projects/{project_id}", tags=["csv"])


def _export_filename(sprint_name: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9_-]+", "_", sprint_name).strip("_") or "sprint"
    return f"{slug}.csv"


@router.get("/sprints/{sprint_id}/export.csv")
async def export_sprint(sprint_id: int, db: ProjectDb):
    """Sprint stories in the import format, oldest first."""
    sprint = await fetch(db, Sprint, sprint_id, "Sprint")
    stories = sorted(await list_stories(db, sprint_id=sprint.id), key=lambda s: s.id)
    return Response(
        content=stories_to_csv(stories).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{_export_filename(sprint.name)}"'},
    )


@router.post("/sprints/{sprint_id}/import", response_model=ImportResult)
async def import_into_sprint(
    sprint_id: int,
    file: Annotated[UploadFile, File()],
    db: ProjectDb,
):
    await fetch(db, Sprint, sprint_id, "Sprint")
    return await import_stories(db, await file.read(), sprint_id)


@router.post("/backlog/import", response_model=ImportResult)
async def import_into_backlog(
    file: Annotated[UploadFile, File()],
    db: ProjectDb,
):
    return await import_stories(db, await file.read(), None)


@router.post("/sprints/{sprint_id}/status-import", response_model=StatusImportResult)
async def import_statuses(
    sprint_id: int,
    file: Annotated[UploadFile, File()],
    db: ProjectDb,
):
    """Bulk status update from a ``Story,Status`` file."""
    await fetch(db, Sprint, sprint_id, "Sprint")
    return await import_status_updates(db, await file.read(), sprint_id)
