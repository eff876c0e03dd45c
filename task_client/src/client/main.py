from __future__ import annotations

from typing import Optional

from .accessor import TaskAccessor, get_accessor
from .controller import TaskListController
from .logging_setup import setup_logging
from .models import TaskListState
from .settings import Settings, get_settings


# PUBLIC_INTERFACE
def create_task_list(
    settings: Optional[Settings] = None,
    accessor: Optional[TaskAccessor] = None,
    activate: bool = True,
    configure_logging: bool = False,
) -> TaskListController:
    """
    Build a task list controller with a fresh, empty state.

    Args:
        settings: Client settings; loaded from the environment when omitted.
        accessor: Remote accessor; an HTTP accessor is built from settings when omitted.
        activate: Run the initial fetch, as the screen does when it is shown.
        configure_logging: Install the stderr log handler at settings.log_level.

    Returns:
        The controller. If the activation fetch failed, its state carries the error.
    """
    s = settings or get_settings()
    if configure_logging:
        setup_logging(s.log_level)

    controller = TaskListController(
        accessor=accessor if accessor is not None else get_accessor(s),
        state=TaskListState(),
    )
    if activate:
        controller.fetch_tasks()
    return controller
