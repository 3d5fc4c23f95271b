"""Pydantic models for the task extraction API."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from .task_types import ExtractedTask, Priority, TaskSource


class TextInput(BaseModel):
    """Request payload for task extraction."""

    text: str = Field(..., min_length=1, description="Transcribed speech to analyse")
    existing_tasks: list[str] = Field(
        default_factory=list,
        description="Texts of tasks the journal already holds; matching extractions are skipped",
    )
    reference_time: dt.datetime | None = Field(
        default=None,
        description="Moment relative dates are computed from; defaults to the server clock",
    )


class ExtractedTaskModel(BaseModel):
    """Structured representation returned to the frontend."""

    id: str = Field(..., description="Unique task identifier")
    text: str = Field(..., min_length=1, description="Sentence the task was recognised in")
    date: dt.date = Field(..., description="Due date in YYYY-MM-DD format")
    priority: Priority = Field(default=Priority.MEDIUM, description="Priority derived from urgency cues")
    source: TaskSource = Field(default=TaskSource.AUDIO, description="Where the task came from")
    completed: bool = Field(default=False, description="Completion flag, always false on extraction")

    @classmethod
    def from_entity(cls, item: ExtractedTask) -> "ExtractedTaskModel":
        return cls(**item.to_payload())


class TasksOutput(BaseModel):
    """Response payload containing extracted tasks."""

    tasks: list[ExtractedTaskModel]


class HealthResponse(BaseModel):
    """Simple health-check response."""

    status: str
