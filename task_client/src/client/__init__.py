"""
Task list client package.

Keeps a local mirror of a remote task collection and exposes the commands
of the task list screen (fetch, add, edit, toggle, delete) on top of it.
"""

from .controller import TaskListController  # noqa: F401
from .main import create_task_list  # noqa: F401
