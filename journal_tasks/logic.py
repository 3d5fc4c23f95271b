"""Core task extraction logic used by the FastAPI service."""

from __future__ import annotations

import logging
import os
import re
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from .dates import DateResolver
from .task_types import ExtractedTask, Priority, TaskSource

logger = logging.getLogger(__name__)


# Checked in order; the first level with a matching cue wins.
PRIORITY_KEYWORDS = (
    (Priority.HIGH, ("urgent", "asap", "immediately", "critical", "important", "deadline", "due")),
    (Priority.MEDIUM, ("soon", "priority", "should", "need to", "must")),
    (Priority.LOW, ("when possible", "eventually", "someday", "maybe", "consider")),
)

TASK_KEYWORDS = frozenset(
    [
        "meeting",
        "call",
        "appointment",
        "presentation",
        "review",
        "submit",
        "complete",
        "finish",
        "send",
        "email",
        "follow up",
        "prepare",
        "plan",
        "schedule",
        "book",
        "buy",
        "purchase",
        "order",
        "contact",
        "visit",
        "attend",
        "join",
        "deliver",
        "create",
        "write",
        "draft",
        "design",
        "develop",
        "test",
        "fix",
        "update",
    ]
)

ACTION_PATTERNS = [
    re.compile(r"i\s+(need to|have to|must|will|should|plan to)\s+([^.!?]+)", flags=re.IGNORECASE),
    re.compile(r"i['’]m\s+(going to|planning to|scheduling)\s+([^.!?]+)", flags=re.IGNORECASE),
    re.compile(r"(meeting|call|appointment|presentation)\s+([^.!?]+)", flags=re.IGNORECASE),
    re.compile(r"(review|complete|finish|submit|send)\s+([^.!?]+)", flags=re.IGNORECASE),
]

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

RESOLVE_WEEKDAYS_ENV = "TASK_EXTRACTOR_RESOLVE_WEEKDAYS"


class TaskExtractor:
    """High-level facade that encapsulates all extraction steps."""

    def __init__(self, resolve_weekdays: Optional[bool] = None) -> None:
        if resolve_weekdays is None:
            resolve_weekdays = os.getenv(RESOLVE_WEEKDAYS_ENV) == "1"
        self._resolve_weekdays = resolve_weekdays
        self._date_resolver = DateResolver(resolve_weekdays=resolve_weekdays)

    @property
    def resolve_weekdays(self) -> bool:
        return self._resolve_weekdays

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def extract_tasks(self, transcription: str, now: Optional[datetime] = None) -> List[ExtractedTask]:
        """Turn a transcription into task records.

        ``now`` is sampled once so every relative date in the call shares the same
        notion of today.
        """

        today = (now or datetime.now()).date()
        sentences = list(split_sentences(transcription))
        if not sentences:
            logger.info("Empty transcription received, returning no tasks")
            return []

        results: List[ExtractedTask] = []
        for sentence in sentences:
            dates = self._date_resolver.resolve(sentence, today)
            results.extend(extract_tasks_from_sentence(sentence, dates, today))

        logger.info(
            "Extracted %d tasks from %d sentences (today=%s, resolve_weekdays=%s)",
            len(results),
            len(sentences),
            today.isoformat(),
            self._resolve_weekdays,
        )
        return results


# ----------------------------------------------------------------------
# Text processing utilities
# ----------------------------------------------------------------------

def split_sentences(text: str) -> Iterable[str]:
    for sentence in SENTENCE_SPLIT_RE.split(text):
        cleaned = sentence.strip()
        if cleaned:
            yield cleaned


def is_task_worthy(sentence: str) -> bool:
    lower = sentence.lower()
    if any(keyword in lower for keyword in TASK_KEYWORDS):
        return True
    return any(pattern.search(sentence) for pattern in ACTION_PATTERNS)


def determine_priority(text: str) -> Priority:
    lower = text.lower()
    for priority, keywords in PRIORITY_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return priority
    return Priority.MEDIUM


def extract_tasks_from_sentence(sentence: str, dates: Sequence[date], today: date) -> List[ExtractedTask]:
    """Emit one task per resolved date, or a single task due tomorrow."""

    text = sentence.strip()
    if not text or not is_task_worthy(text):
        return []

    priority = determine_priority(text)
    due_dates = list(dates) or [today + timedelta(days=1)]
    return [
        ExtractedTask(text=text, date=due, priority=priority, source=TaskSource.AUDIO)
        for due in due_dates
    ]


def filter_new_tasks(tasks: Iterable[ExtractedTask], existing_texts: Iterable[str]) -> List[ExtractedTask]:
    """Drop tasks whose text is already known, ignoring case."""

    known = {text.lower() for text in existing_texts}
    return [task for task in tasks if task.text.lower() not in known]


_default_extractor: Optional[TaskExtractor] = None


def extract_tasks_from_transcription(transcription: str, now: Optional[datetime] = None) -> List[ExtractedTask]:
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = TaskExtractor()
    return _default_extractor.extract_tasks(transcription, now=now)
