from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import Iterable, List, Optional, Set

from .schemas import Task, TaskId
from .utils import dedupe_by_id, index_of


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class EditBuffer:
    """
    The single in-progress title edit.

    Fields:
    - task_id: id of the task being edited
    - title: working copy of the title, as typed
    """

    task_id: TaskId
    title: str


class TaskListState:
    """
    Thread-safe holder for everything the task list screen shows.

    The task collection is a cached view of the server, never authoritative.
    Each id appears at most once. All reads return copies so callers cannot
    mutate the collection behind the lock.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None) -> None:
        self._lock = RLock()
        self._tasks: List[Task] = dedupe_by_id(tasks or [])
        self._edit: Optional[EditBuffer] = None
        self._new_title = ""
        self._error: Optional[str] = None
        self._pending: Set[TaskId] = set()

    # Read access

    @property
    def tasks(self) -> List[Task]:
        with self._lock:
            return list(self._tasks)

    @property
    def edit(self) -> Optional[EditBuffer]:
        with self._lock:
            return self._edit

    @property
    def new_title(self) -> str:
        with self._lock:
            return self._new_title

    @property
    def error(self) -> Optional[str]:
        with self._lock:
            return self._error

    @property
    def pending(self) -> Set[TaskId]:
        with self._lock:
            return set(self._pending)

    def get(self, task_id: TaskId) -> Optional[Task]:
        with self._lock:
            i = index_of(self._tasks, task_id)
            return None if i is None else self._tasks[i]

    # Collection mutations

    def replace_all(self, tasks: Iterable[Task]) -> None:
        with self._lock:
            self._tasks = dedupe_by_id(tasks)

    def append(self, task: Task) -> None:
        """Add a task at the end, or replace it in place if its id is already present."""
        with self._lock:
            i = index_of(self._tasks, task.id)
            if i is None:
                self._tasks.append(task)
            else:
                self._tasks[i] = task

    def replace(self, task_id: TaskId, task: Task) -> bool:
        """
        Swap the entry for task_id with task. Return False if task_id is absent.

        If task carries a different id that is already present elsewhere,
        that other entry is dropped so ids stay unique.
        """
        with self._lock:
            i = index_of(self._tasks, task_id)
            if i is None:
                return False
            self._tasks[i] = task
            if task.id != task_id:
                self._tasks = [t for j, t in enumerate(self._tasks) if j == i or t.id != task.id]
            return True

    def set_completed(self, task_id: TaskId, completed: bool) -> bool:
        """Change only the completed flag of one entry. Return False if task_id is absent."""
        with self._lock:
            i = index_of(self._tasks, task_id)
            if i is None:
                return False
            self._tasks[i] = self._tasks[i].model_copy(update={"completed": completed})
            return True

    def remove(self, task_id: TaskId) -> bool:
        with self._lock:
            i = index_of(self._tasks, task_id)
            if i is None:
                return False
            del self._tasks[i]
            return True

    # Buffers

    def set_new_title(self, title: str) -> None:
        with self._lock:
            self._new_title = title

    def start_edit(self, task_id: TaskId, title: str) -> EditBuffer:
        with self._lock:
            self._edit = EditBuffer(task_id=task_id, title=title)
            return self._edit

    def set_edit_title(self, title: str) -> bool:
        """Update the working title. Return False when no edit is active."""
        with self._lock:
            if self._edit is None:
                return False
            self._edit = EditBuffer(task_id=self._edit.task_id, title=title)
            return True

    def clear_edit(self) -> None:
        with self._lock:
            self._edit = None

    # Error slot

    def set_error(self, message: str) -> None:
        with self._lock:
            self._error = message

    def clear_error(self) -> None:
        with self._lock:
            self._error = None

    # Per-id sequencing

    def try_begin(self, task_id: TaskId) -> bool:
        """Mark task_id as having a mutation in flight. Return False if it already has one."""
        with self._lock:
            if task_id in self._pending:
                return False
            self._pending.add(task_id)
            return True

    def finish(self, task_id: TaskId) -> None:
        with self._lock:
            self._pending.discard(task_id)
