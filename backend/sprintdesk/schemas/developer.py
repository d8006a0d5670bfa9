"""Developer schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class DeveloperCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)


class DeveloperUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = None


class DeveloperResponse(BaseModel):
    id: int
    name: str
    email: str | None
    created_at: datetime | None

    class Config:
        from_attributes = True
