"""Epic schemas."""
from pydantic import BaseModel, Field


class EpicCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    color: str | None = Field(None, max_length=20)


class EpicUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    color: str | None = Field(None, max_length=20)


class EpicResponse(BaseModel):
    id: int
    name: str
    description: str | None
    color: str

    class Config:
        from_attributes = True
