"""Heuristic extraction of dated to-do items from transcribed voice notes."""

from .logic import TaskExtractor, extract_tasks_from_transcription, filter_new_tasks
from .task_types import ExtractedTask, Priority, TaskSource

__all__ = [
    "ExtractedTask",
    "Priority",
    "TaskExtractor",
    "TaskSource",
    "extract_tasks_from_transcription",
    "filter_new_tasks",
]
