from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from .accessor import TaskAccessor
from .errors import (
    DEFAULT_ERROR_MESSAGE,
    EMPTY_TITLE_MESSAGE,
    BusyError,
    TaskClientError,
    ValidationError,
    describe_error,
)
from .models import TaskListState
from .schemas import TaskId, TaskUpdate
from .utils import clean_title

logger = logging.getLogger(__name__)

ADD_FAILED = "Failed to add task"
UPDATE_FAILED = "Failed to update task"
TOGGLE_FAILED = "Failed to toggle task completion"
DELETE_FAILED = "Failed to delete task"
BUSY_MESSAGE = "Another request for this task is still in progress"
NO_EDIT_MESSAGE = "No task selected for editing"
NOT_FOUND_MESSAGE = "Task not found"


# PUBLIC_INTERFACE
class TaskListController:
    """
    Command layer of the task list screen.

    Each command calls the accessor once, then reconciles the injected
    TaskListState: on success the collection is updated and the error slot
    cleared, on failure the collection is left as it was and the error slot
    is set. Commands return True on success and False on failure.

    Mutations of a single task id are sequenced: a second mutation of an id
    whose first one has not completed fails with a BusyError message instead
    of racing it.
    """

    def __init__(self, accessor: TaskAccessor, state: Optional[TaskListState] = None) -> None:
        self._accessor = accessor
        self._state = state if state is not None else TaskListState()

    @property
    def state(self) -> TaskListState:
        return self._state

    # PUBLIC_INTERFACE
    def fetch_tasks(self) -> bool:
        """
        Replace the whole collection with the server's list.
        """
        try:
            tasks = self._accessor.list()
        except TaskClientError as e:
            return self._fail(e, DEFAULT_ERROR_MESSAGE)
        self._state.replace_all(tasks)
        self._state.clear_error()
        logger.info("Fetched %d tasks", len(tasks))
        return True

    def set_new_title(self, title: str) -> None:
        self._state.set_new_title(title)

    # PUBLIC_INTERFACE
    def add_task(self, title: Optional[str] = None) -> bool:
        """
        Create a task from `title`, or from the input buffer when no title is given.

        Blank titles are rejected without contacting the server. The created
        task, as returned by the server, is appended and the input buffer cleared.
        """
        raw = self._state.new_title if title is None else title
        cleaned = clean_title(raw)
        if cleaned is None:
            return self._fail(ValidationError(EMPTY_TITLE_MESSAGE), ADD_FAILED)

        try:
            created = self._accessor.create(cleaned)
        except TaskClientError as e:
            return self._fail(e, ADD_FAILED)
        self._state.append(created)
        self._state.set_new_title("")
        self._state.clear_error()
        logger.info("Added task %s", created.id)
        return True

    # PUBLIC_INTERFACE
    def begin_edit(self, task_id: TaskId) -> bool:
        """
        Start editing a task; any previous edit is discarded.
        The working title starts as the task's current title.
        """
        task = self._state.get(task_id)
        if task is None:
            return self._fail(ValidationError(NOT_FOUND_MESSAGE), UPDATE_FAILED)
        self._state.start_edit(task.id, task.title)
        return True

    def set_edit_title(self, title: str) -> bool:
        if not self._state.set_edit_title(title):
            return self._fail(ValidationError(NO_EDIT_MESSAGE), UPDATE_FAILED)
        return True

    # PUBLIC_INTERFACE
    def update_task(self) -> bool:
        """
        Submit the active edit.

        On success the local entry is replaced wholesale by the server's
        representation, so every echoed field (including `completed`) is
        taken from the response, and the edit is discarded. On failure both
        the entry and the edit are kept so the user can retry.
        """
        edit = self._state.edit
        if edit is None:
            return self._fail(ValidationError(NO_EDIT_MESSAGE), UPDATE_FAILED)
        cleaned = clean_title(edit.title)
        if cleaned is None:
            return self._fail(ValidationError(EMPTY_TITLE_MESSAGE), UPDATE_FAILED)

        try:
            with self._sequenced(edit.task_id):
                updated = self._accessor.replace(edit.task_id, TaskUpdate(title=cleaned))
                self._state.replace(edit.task_id, updated)
                self._state.clear_edit()
        except TaskClientError as e:
            return self._fail(e, UPDATE_FAILED)
        self._state.clear_error()
        logger.info("Updated title of task %s", edit.task_id)
        return True

    # PUBLIC_INTERFACE
    def toggle_task_completion(self, task_id: TaskId, completed: bool) -> bool:
        """
        Ask the server to set `completed` to the negation of the flag passed in.

        Only the local `completed` flag is changed on success, and it is set
        from the argument rather than the response body. Other server-side
        effects show up on the next fetch.
        """
        target = not completed
        try:
            with self._sequenced(task_id):
                self._accessor.replace(task_id, TaskUpdate(completed=target))
                self._state.set_completed(task_id, target)
        except TaskClientError as e:
            return self._fail(e, TOGGLE_FAILED)
        self._state.clear_error()
        logger.info("Marked task %s completed=%s", task_id, target)
        return True

    # PUBLIC_INTERFACE
    def delete_task(self, task_id: TaskId) -> bool:
        """
        Delete a task on the server, then drop it from the collection.
        """
        try:
            with self._sequenced(task_id):
                self._accessor.delete(task_id)
                self._state.remove(task_id)
        except TaskClientError as e:
            return self._fail(e, DELETE_FAILED)
        self._state.clear_error()
        logger.info("Deleted task %s", task_id)
        return True

    @contextmanager
    def _sequenced(self, task_id: TaskId) -> Iterator[None]:
        if not self._state.try_begin(task_id):
            raise BusyError(BUSY_MESSAGE)
        try:
            yield
        finally:
            self._state.finish(task_id)

    def _fail(self, exc: TaskClientError, default_message: str) -> bool:
        message = describe_error(exc, default_message)
        if isinstance(exc, (ValidationError, BusyError)):
            logger.warning("%s", message)
        else:
            logger.error("%s (%s: %s)", message, exc.__class__.__name__, exc)
        self._state.set_error(message)
        return False
