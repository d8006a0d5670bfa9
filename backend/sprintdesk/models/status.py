"""Workflow status model."""
from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sprintdesk.database import ProjectBase

# (name, color, is_default, is_completed), seeded in this order
DEFAULT_STATUSES: list[tuple[str, str, bool, bool]] = [
    ("Open", "#6B7280", True, False),
    ("In Progress", "#3B82F6", False, False),
    ("On Hold", "#F59E0B", False, False),
    ("Resolved", "#10B981", False, True),
    ("Closed", "#059669", False, True),
    ("Deployed", "#7C3AED", False, True),
]


class Status(ProjectBase):
    """Board column. Exactly one row carries ``is_default``."""

    __tablename__ = "statuses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
