"""Project tasks with GitHub issue mirroring and task-skill authorization."""

__version__ = "0.1.0"
