"""Developer model."""
from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from sprintdesk.database import ProjectBase


class Developer(ProjectBase):
    __tablename__ = "developers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
