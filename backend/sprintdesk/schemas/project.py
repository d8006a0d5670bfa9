"""Project schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    db_path: str | None = Field(None, max_length=1024)
    story_point_hours: float | None = Field(None, gt=0)
    daily_hours: float | None = Field(None, gt=0, le=24)


class ProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    story_point_hours: float | None = Field(None, gt=0)
    daily_hours: float | None = Field(None, gt=0, le=24)


class ProjectResponse(BaseModel):
    id: int
    name: str
    db_path: str
    story_point_hours: float
    daily_hours: float
    created_at: datetime | None
    updated_at: datetime | None

    class Config:
        from_attributes = True
