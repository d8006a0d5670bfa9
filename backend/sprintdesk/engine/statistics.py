"""Story rollups by status, epic and developer."""
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from sprintdesk.schemas.report import (
    BurndownPoint,
    DeveloperStat,
    EpicStat,
    SprintStats,
)

NO_EPIC_NAME = "No Epic"


@dataclass(frozen=True)
class StoryFacts:
    """The parts of a story the aggregator reads."""

    status: str
    story_points: float | None = None
    epic_id: int | None = None
    epic_name: str | None = None
    epic_color: str | None = None
    assignee_id: int | None = None
    assignee_name: str | None = None


def facts_from_story(story) -> StoryFacts:
    """Flatten a loaded ``Story`` row (epic, assignee and status joined)."""
    return StoryFacts(
        status=story.status.name,
        story_points=story.story_points,
        epic_id=story.epic_id,
        epic_name=story.epic.name if story.epic else None,
        epic_color=story.epic.color if story.epic else None,
        assignee_id=story.assignee_id,
        assignee_name=story.assignee.name if story.assignee else None,
    )


def percent(part: float, whole: float) -> int:
    """round(part / whole * 100) half-up; 0 when whole is 0."""
    if not whole:
        return 0
    ratio = Decimal(str(part)) / Decimal(str(whole)) * Decimal(100)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def aggregate(
    stories: Iterable[StoryFacts],
    completed_statuses: set[str],
    no_epic_color: str = "#9CA3AF",
) -> SprintStats:
    """Single pass over ``stories``. Mapping keys keep first-seen order."""
    total_stories = 0
    total_points = 0.0
    completed_points = 0.0
    status_counts: dict[str, int] = {}
    status_points: dict[str, float] = {}
    developers: dict[int, dict] = {}
    epics: dict[int | None, dict] = {}

    for s in stories:
        points = s.story_points or 0.0
        done = s.status in completed_statuses
        total_stories += 1
        total_points += points
        if done:
            completed_points += points

        status_counts[s.status] = status_counts.get(s.status, 0) + 1
        status_points[s.status] = status_points.get(s.status, 0.0) + points

        if s.assignee_id is not None:
            dev = developers.setdefault(s.assignee_id, {
                "name": s.assignee_name or "",
                "total_points": 0.0,
                "completed_points": 0.0,
                "story_count": 0,
            })
            dev["total_points"] += points
            dev["story_count"] += 1
            if done:
                dev["completed_points"] += points

        epic = epics.setdefault(s.epic_id, {
            "name": s.epic_name or NO_EPIC_NAME,
            "color": s.epic_color or no_epic_color,
            "total_points": 0.0,
            "completed_points": 0.0,
            "story_count": 0,
        })
        epic["total_points"] += points
        epic["story_count"] += 1
        if done:
            epic["completed_points"] += points

    return SprintStats(
        total_stories=total_stories,
        total_points=total_points,
        completed_points=completed_points,
        completion_percent=percent(completed_points, total_points),
        status_counts=status_counts,
        status_points=status_points,
        developer_stats=[
            DeveloperStat(
                developer_id=dev_id,
                completion_percent=percent(d["completed_points"], d["total_points"]),
                **d,
            )
            for dev_id, d in developers.items()
        ],
        epic_stats=[
            EpicStat(
                epic_id=epic_id,
                completion_percent=percent(e["completed_points"], e["total_points"]),
                **e,
            )
            for epic_id, e in epics.items()
        ],
    )


def burndown(
    total_points: float,
    completed_points: float,
    duration_days: int,
    start_date: date,
    today: date,
) -> tuple[int, list[BurndownPoint]]:
    """Ideal line from total to zero, and a straight actual line up to today.

    Returns (elapsed days, points). Actual values after today are None.
    """
    elapsed = min(max(0, (today - start_date).days), duration_days)
    points = []
    for i in range(duration_days + 1):
        ideal = total_points - (total_points / duration_days) * i if duration_days else 0.0
        actual = None
        if i <= elapsed:
            progress = (completed_points / elapsed) * i if elapsed > 0 else 0.0
            actual = round(max(0.0, total_points - progress), 2)
        points.append(BurndownPoint(
            day=i,
            date=start_date + timedelta(days=i),
            ideal=round(ideal, 2),
            actual=actual,
        ))
    return elapsed, points
