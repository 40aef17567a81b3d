"""
Task assigning domain module.

This module contains the records exchanged with the task assigning host:
directory users and groups, and the task data label extractors read.

The Timefold planning solution lives in ``.solution`` and is imported
explicitly, since loading it starts the solver's JVM.
"""

from .domain import DefaultLabels, Group, User, TaskData

__all__ = [
    "DefaultLabels",
    "Group",
    "User",
    "TaskData",
]
