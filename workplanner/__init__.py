"""WorkPlanner: projects, sprints, task boards and time tracking."""

__version__ = "1.0.0"
