"""Core task model for TaskProc MCP."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskModel(BaseModel):
    """A single task record as held by the canonical store.

    Instances are frozen: the store replaces tasks wholesale on reload and
    never edits them in place.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1)
    status: str = Field(default="todo", min_length=1)
    priority: int = 1
    created_date: str = ""
    description: str | None = None
    assignee: str | None = None
    due_date: str | None = None
    tags: tuple[str, ...] = ()

    @field_validator("description", "assignee", "due_date", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("created_date", mode="before")
    @classmethod
    def none_to_blank(cls, v: str | None) -> str:
        return "" if v is None else v

    def __str__(self) -> str:
        return f"ID: {self.id} | Title: {self.title} | Status: {self.status} | Priority: {self.priority}"
