"""Project catalog model."""
from sqlalchemy import DateTime, Float, String, func
from sqlalchemy.orm import Mapped, mapped_column

from sprintdesk.database import CatalogBase


class Project(CatalogBase):
    """Catalog entry pointing at the project's own database file."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    db_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    story_point_hours: Mapped[float] = mapped_column(Float, nullable=False, default=4)
    daily_hours: Mapped[float] = mapped_column(Float, nullable=False, default=8)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
