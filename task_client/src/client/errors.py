from __future__ import annotations

from typing import Optional

EMPTY_TITLE_MESSAGE = "Task title cannot be empty"
NO_RESPONSE_MESSAGE = "No response from server"
DEFAULT_ERROR_MESSAGE = "An error occurred"


class TaskClientError(Exception):
    """Base class for every failure a task command can report."""


class ValidationError(TaskClientError):
    """Input rejected locally, before any request was sent."""


class BusyError(TaskClientError):
    """Another mutation for the same task id is still in flight."""


class ApplicationError(TaskClientError):
    """
    A response was received but it was not a success, or its body could not
    be read as the expected task payload.

    status_code is None when the response arrived but could not be decoded.
    """

    def __init__(self, status_code: Optional[int], server_message: Optional[str] = None) -> None:
        if status_code is None:
            default = "Response could not be read"
        else:
            default = f"Request failed with status {status_code}"
        super().__init__(server_message or default)
        self.status_code = status_code
        self.server_message = server_message


class TransportError(TaskClientError):
    """The request was sent but no response reached the client."""


class ConstructionError(TaskClientError):
    """The request could not be built or sent at all."""


# PUBLIC_INTERFACE
def describe_error(exc: TaskClientError, default_message: str = DEFAULT_ERROR_MESSAGE) -> str:
    """
    Map a command failure to the message shown to the user.

    - ApplicationError: the server-supplied message, else default_message
    - TransportError: always NO_RESPONSE_MESSAGE
    - anything else: the failure's own description, else default_message
    """
    if isinstance(exc, ApplicationError):
        return exc.server_message or default_message
    if isinstance(exc, TransportError):
        return NO_RESPONSE_MESSAGE
    return str(exc).strip() or default_message
