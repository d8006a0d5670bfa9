"""Story CSV import, status-update import and sprint export.

Columns: Epic,Story,Description,Developer,Story Points,Status (header required).
Rows are matched to existing stories of the same scope (one sprint, or the
backlog) by case-insensitive title, so importing a file twice updates rather
than duplicates. A row that cannot be read is skipped; the rest carry on.
"""
import logging
import math
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprintdesk.errors import CsvParseError, ImportFileError
from sprintdesk.models.story import Story
from sprintdesk.schemas.report import ImportResult, StatusImportResult
from sprintdesk.services.csv_io import format_points, read_rows, write_rows
from sprintdesk.services.resolver import NameResolver, normalize

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Epic", "Story", "Description", "Developer", "Story Points", "Status"]


@dataclass
class StoryRow:
    epic: str
    title: str
    description: str
    developer: str
    story_points: float | None
    status: str


def parse_story_row(fields: list[str], line_number: int) -> StoryRow:
    padded = list(fields) + [""] * (len(CSV_HEADERS) - len(fields))
    epic, title, description, developer, points, status = padded[: len(CSV_HEADERS)]
    story_points = None
    if points:
        try:
            story_points = float(points)
        except ValueError:
            raise CsvParseError(line_number, f"story points '{points}' is not a number")
        if math.isnan(story_points) or math.isinf(story_points) or story_points < 0:
            raise CsvParseError(line_number, f"story points '{points}' out of range")
    return StoryRow(
        epic=epic,
        title=title,
        description=description,
        developer=developer,
        story_points=story_points,
        status=status,
    )


def _data_rows(content: bytes) -> tuple[list[str], list[list[str]]]:
    rows = read_rows(content)
    if len(rows) < 2:
        raise ImportFileError("CSV is empty")
    return rows[0], rows[1:]


async def _story_index(db: AsyncSession, sprint_id: int | None) -> dict[str, Story]:
    """Stories of one scope keyed by normalized title; oldest wins on duplicates."""
    q = select(Story).order_by(Story.id)
    if sprint_id is None:
        q = q.where(Story.sprint_id.is_(None))
    else:
        q = q.where(Story.sprint_id == sprint_id)
    index: dict[str, Story] = {}
    for story in (await db.execute(q)).scalars().all():
        index.setdefault(normalize(story.title), story)
    return index


async def import_stories(db: AsyncSession, content: bytes, sprint_id: int | None) -> ImportResult:
    """Upsert stories from CSV into a sprint, or into the backlog when ``sprint_id`` is None."""
    _, data = _data_rows(content)
    resolver = NameResolver(db)
    index = await _story_index(db, sprint_id)
    imported = skipped = 0

    for line_number, fields in enumerate(data, start=2):
        try:
            row = parse_story_row(fields, line_number)
        except CsvParseError as e:
            logger.debug("Skipping CSV row: %s", e)
            skipped += 1
            continue
        if not row.title:
            skipped += 1
            continue

        epic = await resolver.epic(row.epic)
        developer = await resolver.developer(row.developer)
        key = normalize(row.title)
        story = index.get(key)
        if story is None:
            status = await resolver.status(row.status)
            story = Story(
                title=row.title,
                description=row.description or None,
                story_points=row.story_points,
                epic_id=epic.id if epic else None,
                assignee_id=developer.id if developer else None,
                sprint_id=sprint_id,
                status_id=status.id,
            )
            db.add(story)
            index[key] = story
        else:
            # Blank cells keep what the story already has
            if row.story_points is not None:
                story.story_points = row.story_points
            if row.description:
                story.description = row.description
            if epic:
                story.epic_id = epic.id
            if developer:
                story.assignee_id = developer.id
            if row.status:
                story.status_id = (await resolver.status(row.status)).id
        await db.flush()
        imported += 1

    logger.info(
        "Imported %d stories into %s (%d rows skipped)",
        imported,
        f"sprint {sprint_id}" if sprint_id is not None else "backlog",
        skipped,
    )
    return ImportResult(imported=imported, skipped=skipped)


async def import_status_updates(db: AsyncSession, content: bytes, sprint_id: int) -> StatusImportResult:
    """Set story statuses in a sprint from a two-column ``Story,Status`` file.

    Columns are found by header name; otherwise the first two columns are used.
    Titles that match no story in the sprint are skipped.
    """
    header, data = _data_rows(content)
    names = [normalize(h) for h in header]
    if "story" in names and "status" in names:
        title_col, status_col = names.index("story"), names.index("status")
    else:
        title_col, status_col = 0, 1

    resolver = NameResolver(db)
    index = await _story_index(db, sprint_id)
    updated = skipped = 0
    for fields in data:
        title = fields[title_col] if title_col < len(fields) else ""
        status_name = fields[status_col] if status_col < len(fields) else ""
        story = index.get(normalize(title))
        if not title or not status_name or story is None:
            skipped += 1
            continue
        story.status_id = (await resolver.status(status_name)).id
        updated += 1
    await db.flush()
    logger.info("Updated status of %d stories in sprint %s (%d rows skipped)", updated, sprint_id, skipped)
    return StatusImportResult(updated=updated, skipped=skipped)


def stories_to_csv(stories: list[Story]) -> str:
    """Export rows in the import format; stories need epic, assignee and status loaded."""
    rows = [
        [
            s.epic.name if s.epic else "",
            s.title,
            s.description or "",
            s.assignee.name if s.assignee else "",
            format_points(s.story_points),
            s.status.name,
        ]
        for s in stories
    ]
    return write_rows(CSV_HEADERS, rows)
