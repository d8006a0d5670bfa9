"""Epic model."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sprintdesk.database import ProjectBase


class Epic(ProjectBase):
    """Thematic grouping of stories, independent of sprints."""

    __tablename__ = "epics"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default="#3B82F6")
