"""SQLAlchemy models."""
from sprintdesk.models.developer import Developer
from sprintdesk.models.epic import Epic
from sprintdesk.models.project import Project
from sprintdesk.models.sprint import Sprint, SprintMember, SprintStatus
from sprintdesk.models.status import Status
from sprintdesk.models.story import Story

__all__ = [
    "Developer",
    "Epic",
    "Project",
    "Sprint",
    "SprintMember",
    "SprintStatus",
    "Status",
    "Story",
]
