"""Services module"""
from .issue_linker import IssueLinker
from .task_service import ExternalSyncFailure, TaskResult, TaskService, ValidationFailure
from .task_skill_service import PermissionDenied, TaskSkillService

__all__ = [
    "IssueLinker",
    "TaskService", "TaskResult", "ValidationFailure", "ExternalSyncFailure",
    "TaskSkillService", "PermissionDenied",
]
