from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple
from urllib.parse import quote

import httpx
import pydantic
from pydantic import TypeAdapter

from .errors import ApplicationError, ConstructionError, TransportError
from .schemas import ErrorBody, Task, TaskCreate, TaskId, TaskUpdate
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

_TASK_LIST = TypeAdapter(List[Task])

# Raised by httpx before anything goes on the wire
_CONSTRUCTION_ERRORS = (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError)


# PUBLIC_INTERFACE
class TaskAccessor(ABC):
    """Contract for the remote task collection consumed by the command layer."""

    @abstractmethod
    def list(self) -> List[Task]:
        """Return every task known to the server."""

    @abstractmethod
    def create(self, title: str) -> Task:
        """Create a task with the given title and return the server representation."""

    @abstractmethod
    def replace(self, task_id: TaskId, fields: TaskUpdate) -> Task:
        """Merge the set fields into the task and return the updated representation."""

    @abstractmethod
    def delete(self, task_id: TaskId) -> None:
        """Delete the task."""


class HttpTaskAccessor(TaskAccessor):
    """
    TaskAccessor backed by an httpx.Client talking to the REST endpoints:

        GET    /tasks
        POST   /tasks
        PUT    /tasks/{id}
        DELETE /tasks/{id}

    Every failure is raised as ApplicationError, TransportError or
    ConstructionError. An injected client is used as-is and never closed here.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 10.0,
        auth: Optional[Tuple[str, str]] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(base_url=base_url, timeout=timeout, auth=auth)
        self._client = client

    def __enter__(self) -> "HttpTaskAccessor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(self, method: str, path: str, json: Optional[dict] = None) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            response = self._client.request(method, path, json=json)
        except _CONSTRUCTION_ERRORS as e:
            logger.warning("%s %s could not be sent: %s", method, path, e)
            raise ConstructionError(str(e)) from e
        except httpx.TransportError as e:
            logger.warning("%s %s got no response: %s", method, path, e.__class__.__name__)
            raise TransportError(str(e)) from e
        except (httpx.DecodingError, httpx.TooManyRedirects) as e:
            # A response arrived but could not be used
            logger.warning("%s %s returned an unreadable response: %s", method, path, e)
            raise ApplicationError(None) from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ConstructionError(str(e)) from e

        if not response.is_success:
            message = _server_message(response)
            logger.warning("%s %s failed with status %s", method, path, response.status_code)
            raise ApplicationError(response.status_code, message)
        return response

    def list(self) -> List[Task]:
        response = self._request("GET", "/tasks")
        return _parse(response, _TASK_LIST)

    def create(self, title: str) -> Task:
        try:
            payload = TaskCreate(title=title)
        except pydantic.ValidationError as e:
            raise ConstructionError(_first_error(e)) from e
        response = self._request("POST", "/tasks", json=payload.model_dump())
        return _parse(response, Task)

    def replace(self, task_id: TaskId, fields: TaskUpdate) -> Task:
        response = self._request("PUT", _task_path(task_id), json=fields.to_payload())
        return _parse(response, Task)

    def delete(self, task_id: TaskId) -> None:
        self._request("DELETE", _task_path(task_id))


def _task_path(task_id: TaskId) -> str:
    # Opaque ids must stay a single path segment
    return f"/tasks/{quote(str(task_id), safe='')}"


def _server_message(response: httpx.Response) -> Optional[str]:
    """
    Extract the `message` field of a JSON error body, if there is a usable one.
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    try:
        message = ErrorBody.model_validate(body).message
    except pydantic.ValidationError:
        return None
    if not message or not message.strip():
        return None
    return message.strip()


def _parse(response: httpx.Response, schema: Any) -> Any:
    """
    Decode a success body as `schema` (a model class or TypeAdapter).
    A body that does not match is reported as an ApplicationError without message.
    """
    try:
        data = response.json()
    except ValueError as e:
        logger.warning("Response body is not JSON (status %s)", response.status_code)
        raise ApplicationError(response.status_code) from e
    try:
        if isinstance(schema, TypeAdapter):
            return schema.validate_python(data)
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        logger.warning("Malformed task payload (status %s): %s", response.status_code, _first_error(e))
        raise ApplicationError(response.status_code) from e


def _first_error(exc: pydantic.ValidationError) -> str:
    errors = exc.errors()
    return errors[0]["msg"] if errors else str(exc)


# PUBLIC_INTERFACE
def get_accessor(settings: Optional[Settings] = None) -> TaskAccessor:
    """
    Factory returning an HTTP accessor configured from settings.
    """
    s = settings or get_settings()
    return HttpTaskAccessor(
        base_url=s.base_url,
        timeout=s.timeout_seconds,
        auth=s.basic_auth,
    )
