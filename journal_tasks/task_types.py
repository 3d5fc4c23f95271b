"""Domain entities produced by the task extractor."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Priority(str, Enum):
    """Priority levels assigned from keyword cues."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskSource(str, Enum):
    """Origin of a task inside the journal."""

    AUDIO = "audio"
    MANUAL = "manual"


def new_task_id() -> str:
    return f"task_{uuid.uuid4().hex}"


@dataclass
class ExtractedTask:
    """A to-do item recognised in a transcription sentence."""

    text: str
    date: date
    priority: Priority = Priority.MEDIUM
    source: TaskSource = TaskSource.AUDIO
    completed: bool = False
    id: str = field(default_factory=new_task_id)

    def to_payload(self) -> dict[str, object]:
        """Convert the dataclass into a serialisable dictionary."""

        return {
            "id": self.id,
            "text": self.text,
            "date": self.date.isoformat(),
            "priority": self.priority.value,
            "source": self.source.value,
            "completed": self.completed,
        }
