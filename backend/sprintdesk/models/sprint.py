"""Sprint and sprint member models."""
from datetime import date
from enum import Enum as PyEnum

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sprintdesk.database import ProjectBase


class SprintStatus(str, PyEnum):
    PLANNING = "Planning"
    ACTIVE = "Active"
    COMPLETED = "Completed"


# Forward-only progression; staying in place is always allowed
SPRINT_STATUS_TRANSITIONS: dict[str, list[str]] = {
    "Planning": ["Active", "Completed"],
    "Active": ["Completed"],
    "Completed": [],
}


class Sprint(ProjectBase):
    __tablename__ = "sprints"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=SprintStatus.PLANNING.value)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    members: Mapped[list["SprintMember"]] = relationship(
        "SprintMember",
        back_populates="sprint",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class SprintMember(ProjectBase):
    """A developer's committed share of a sprint (0-100%)."""

    __tablename__ = "sprint_members"
    __table_args__ = (UniqueConstraint("sprint_id", "developer_id", name="uq_sprint_member"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    sprint_id: Mapped[int] = mapped_column(ForeignKey("sprints.id", ondelete="CASCADE"), nullable=False)
    developer_id: Mapped[int] = mapped_column(ForeignKey("developers.id", ondelete="CASCADE"), nullable=False)
    allocation_percent: Mapped[int] = mapped_column(Integer, nullable=False, default=100)

    sprint: Mapped["Sprint"] = relationship("Sprint", back_populates="members")
    developer: Mapped["Developer"] = relationship("Developer", lazy="joined")
