"""Authorization policies."""
from .task_skill_policy import TaskSkillPolicy

__all__ = ["TaskSkillPolicy"]
