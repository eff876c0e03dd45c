from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Server-assigned identifiers may be integers or opaque strings
TaskId = Union[int, str]


# PUBLIC_INTERFACE
class Task(BaseModel):
    """
    A task as returned by the remote service.

    Extra fields echoed by the server are kept so that a wholesale
    replacement from a response carries them along.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy groceries",
                "completed": False,
            }
        },
    )

    id: TaskId = Field(..., description="Server-assigned identifier of the task")
    title: str = Field(..., description="Short title for the task")
    completed: bool = Field(default=False, description="Completion status flag")


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Body for POST /tasks.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"title": "Buy groceries"}})

    title: str = Field(..., description="Short title for the task", min_length=1)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """
        Strip whitespace and reject blank titles.
        """
        s = v.strip()
        if not s:
            raise ValueError("title must not be blank")
        return s


# PUBLIC_INTERFACE
class TaskUpdate(BaseModel):
    """
    Body for PUT /tasks/{id}.
    All fields are optional; only the fields that were set are sent.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"completed": True}}
    )

    title: Optional[str] = Field(default=None, description="New title for the task")
    completed: Optional[bool] = Field(default=None, description="New completion status")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        """
        If title is provided, strip whitespace and reject blank titles.
        """
        if v is None:
            return v
        s = v.strip()
        if not s:
            raise ValueError("title must not be blank")
        return s

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body containing only explicitly set fields."""
        return self.model_dump(exclude_unset=True)


# PUBLIC_INTERFACE
class ErrorBody(BaseModel):
    """
    Optional structured error body. Only `message` is consulted.
    """

    model_config = ConfigDict(extra="ignore")

    message: Optional[str] = None
