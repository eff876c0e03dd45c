from __future__ import annotations

from typing import Iterable, List, Optional

from .schemas import Task, TaskId


# PUBLIC_INTERFACE
def clean_title(value: Optional[str]) -> Optional[str]:
    """
    Return the stripped title, or None when nothing but whitespace is left.
    """
    if value is None:
        return None
    s = value.strip()
    return s or None


# PUBLIC_INTERFACE
def dedupe_by_id(tasks: Iterable[Task]) -> List[Task]:
    """
    Collapse repeated ids: the first position is kept, the last value wins.

    Args:
        tasks: Tasks in server order.

    Returns:
        A new list in which each id appears exactly once.
    """
    positions: dict[TaskId, int] = {}
    result: List[Task] = []
    for task in tasks:
        index = positions.get(task.id)
        if index is None:
            positions[task.id] = len(result)
            result.append(task)
        else:
            result[index] = task
    return result


def index_of(tasks: List[Task], task_id: TaskId) -> Optional[int]:
    for i, task in enumerate(tasks):
        if task.id == task_id:
            return i
    return None
