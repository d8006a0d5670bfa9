"""Report and capacity schemas."""
from datetime import date

from pydantic import BaseModel


class DeveloperStat(BaseModel):
    developer_id: int
    name: str
    total_points: float
    completed_points: float
    story_count: int
    completion_percent: int


class EpicStat(BaseModel):
    epic_id: int | None
    name: str
    color: str
    total_points: float
    completed_points: float
    story_count: int
    completion_percent: int


class SprintStats(BaseModel):
    total_stories: int
    total_points: float
    completed_points: float
    completion_percent: int
    status_counts: dict[str, int]
    status_points: dict[str, float]
    developer_stats: list[DeveloperStat]
    epic_stats: list[EpicStat]


class SprintRollup(BaseModel):
    sprint_id: int
    sprint_name: str
    status: str
    story_count: int
    total_points: float
    completed_points: float
    completion_percent: int


class ProjectStats(SprintStats):
    backlog_points: float
    backlog_count: int
    sprint_stats: list[SprintRollup]


class MemberCapacity(BaseModel):
    developer_id: int
    name: str
    allocation_percent: int
    capacity: float


class SprintCapacity(BaseModel):
    duration_days: int
    daily_hours: float
    story_point_hours: float
    members: list[MemberCapacity]
    team_capacity: float


class MemberPlan(MemberCapacity):
    assigned_points: float
    story_count: int
    load_percent: int
    story_ids: list[int]


class SprintPlan(BaseModel):
    sprint_id: int
    sprint_name: str
    total_stories: int
    total_points: float
    team_capacity: float
    capacity_used_percent: int
    members: list[MemberPlan]
    unassigned_story_ids: list[int]


class BurndownPoint(BaseModel):
    day: int
    date: date
    ideal: float
    actual: float | None


class Burndown(BaseModel):
    total_points: float
    completed_points: float
    elapsed_days: int
    points: list[BurndownPoint]


class ImportResult(BaseModel):
    imported: int
    skipped: int


class StatusImportResult(BaseModel):
    updated: int
    skipped: int
