"""
Pydantic models for tasks.

Task is the record shape returned by the store and serialized on the wire
with camelCase keys. TaskCreate and TaskUpdate describe request bodies;
TaskUpdate tracks which fields were actually sent so that
``{"completed": false}`` is distinguishable from an absent field.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, model_validator
from pydantic.alias_generators import to_camel


class Task(BaseModel):
    """A stored task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    completed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "Task":
        """Build a Task from a tasks table row."""
        return cls(
            id=row["id"],
            title=row["title"],
            completed=bool(row["completed"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


class TaskCreate(BaseModel):
    """Body of POST /api/tasks."""

    title: StrictStr = Field(min_length=1)
    completed: Optional[StrictBool] = None


class TaskUpdate(BaseModel):
    """Body of PATCH /api/tasks/{id}. Only fields that were sent are applied."""

    title: Optional[StrictStr] = Field(default=None, min_length=1)
    completed: Optional[StrictBool] = None

    @model_validator(mode="after")
    def reject_explicit_null(self) -> "TaskUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} must not be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Fields present in the request, with their values."""
        return {name: getattr(self, name) for name in self.model_fields_set}

    def is_empty(self) -> bool:
        return not self.model_fields_set


class TaskFilter(BaseModel):
    """Conjunction of optional list filters."""

    completed: Optional[bool] = None
    q: Optional[str] = None


class DeleteResponse(BaseModel):
    message: str
