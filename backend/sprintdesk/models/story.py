"""Story model."""
from sqlalchemy import DateTime, Float, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sprintdesk.database import ProjectBase


class Story(ProjectBase):
    """Backlog item. ``sprint_id`` NULL means the story sits in the backlog."""

    __tablename__ = "stories"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    story_points: Mapped[float | None] = mapped_column(Float, nullable=True)
    epic_id: Mapped[int | None] = mapped_column(ForeignKey("epics.id", ondelete="SET NULL"), nullable=True, index=True)
    assignee_id: Mapped[int | None] = mapped_column(
        ForeignKey("developers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    sprint_id: Mapped[int | None] = mapped_column(ForeignKey("sprints.id", ondelete="SET NULL"), nullable=True, index=True)
    status_id: Mapped[int] = mapped_column(ForeignKey("statuses.id"), nullable=False, index=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    epic: Mapped["Epic"] = relationship("Epic", lazy="joined")
    assignee: Mapped["Developer"] = relationship("Developer", lazy="joined")
    status: Mapped["Status"] = relationship("Status", lazy="joined")
