"""Sprint and sprint member schemas."""
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

SprintStatusName = Literal["Planning", "Active", "Completed"]


class SprintCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    start_date: date
    duration_days: int | None = Field(None, gt=0)
    status: SprintStatusName = "Planning"


class SprintUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    start_date: date | None = None
    duration_days: int | None = Field(None, gt=0)
    status: SprintStatusName | None = None


class SprintResponse(BaseModel):
    id: int
    name: str
    start_date: date
    duration_days: int
    status: str
    created_at: datetime | None

    class Config:
        from_attributes = True


class SprintMemberIn(BaseModel):
    developer_id: int
    allocation_percent: int = Field(default=100, ge=0, le=100)


class SprintMembersUpdate(BaseModel):
    members: list[SprintMemberIn]


class SprintMemberResponse(BaseModel):
    id: int
    sprint_id: int
    developer_id: int
    allocation_percent: int
    developer_name: str
    developer_email: str | None = None
