"""Story schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class StoryCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    story_points: float | None = Field(None, ge=0)
    epic_id: int | None = None
    assignee_id: int | None = None
    sprint_id: int | None = None
    # Either an id or a name; neither means the default status
    status_id: int | None = None
    status: str | None = None


class StoryUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    story_points: float | None = Field(None, ge=0)
    epic_id: int | None = None
    assignee_id: int | None = None
    sprint_id: int | None = None
    status_id: int | None = None
    status: str | None = None


class StoryAssign(BaseModel):
    sprint_id: int


class StoryResponse(BaseModel):
    id: int
    title: str
    description: str | None
    story_points: float | None
    epic_id: int | None
    assignee_id: int | None
    sprint_id: int | None
    status_id: int
    status: str
    created_at: datetime | None
    updated_at: datetime | None
    epic_name: str | None = None
    epic_color: str | None = None
    assignee_name: str | None = None
