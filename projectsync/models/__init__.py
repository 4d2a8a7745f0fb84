"""Domain models for the project workspace."""

from projectsync.models.changeset import Changeset
from projectsync.models.user import User
from projectsync.models.project import Project, ProjectUser, ProjectRole
from projectsync.models.github import GithubAppInstallation, GithubRepo, GithubIssue
from projectsync.models.task import Task, TaskStatus
from projectsync.models.task_skill import Skill, TaskSkill, TaskSkillChangeset, TaskSkillTarget

__all__ = [
    "Changeset",
    "User",
    "Project", "ProjectUser", "ProjectRole",
    "GithubAppInstallation", "GithubRepo", "GithubIssue",
    "Task", "TaskStatus",
    "Skill", "TaskSkill", "TaskSkillChangeset", "TaskSkillTarget",
]
