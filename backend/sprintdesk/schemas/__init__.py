"""Pydantic schemas."""
from sprintdesk.schemas.developer import DeveloperCreate, DeveloperResponse, DeveloperUpdate
from sprintdesk.schemas.epic import EpicCreate, EpicResponse, EpicUpdate
from sprintdesk.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from sprintdesk.schemas.report import (
    Burndown,
    ImportResult,
    ProjectStats,
    SprintCapacity,
    SprintPlan,
    SprintStats,
    StatusImportResult,
)
from sprintdesk.schemas.sprint import (
    SprintCreate,
    SprintMemberIn,
    SprintMemberResponse,
    SprintMembersUpdate,
    SprintResponse,
    SprintUpdate,
)
from sprintdesk.schemas.status import StatusCreate, StatusResponse, StatusUpdate
from sprintdesk.schemas.story import StoryAssign, StoryCreate, StoryResponse, StoryUpdate

__all__ = [
    "Burndown",
    "DeveloperCreate",
    "DeveloperResponse",
    "DeveloperUpdate",
    "EpicCreate",
    "EpicResponse",
    "EpicUpdate",
    "ImportResult",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectStats",
    "ProjectUpdate",
    "SprintCapacity",
    "SprintCreate",
    "SprintMemberIn",
    "SprintMemberResponse",
    "SprintMembersUpdate",
    "SprintPlan",
    "SprintResponse",
    "SprintStats",
    "SprintUpdate",
    "StatusCreate",
    "StatusImportResult",
    "StatusResponse",
    "StatusUpdate",
    "StoryAssign",
    "StoryCreate",
    "StoryResponse",
    "StoryUpdate",
]
