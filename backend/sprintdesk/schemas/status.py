"""Status schemas."""
from pydantic import BaseModel, Field


class StatusCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(default="#6B7280", max_length=20)
    is_default: bool = False
    is_completed: bool = False
    position: int | None = Field(None, ge=0)


class StatusUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    color: str | None = Field(None, max_length=20)
    is_default: bool | None = None
    is_completed: bool | None = None
    position: int | None = Field(None, ge=0)


class StatusResponse(BaseModel):
    id: int
    name: str
    color: str
    is_default: bool
    is_completed: bool
    position: int

    class Config:
        from_attributes = True
