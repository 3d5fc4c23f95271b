"""FastAPI entrypoint for the journal task extraction service."""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from .logic import TaskExtractor, filter_new_tasks
from .models import ExtractedTaskModel, HealthResponse, TasksOutput, TextInput

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("journal_tasks")

extractor = TaskExtractor()

app = FastAPI(
    title="Journal Task Extraction Service",
    version="1.0.0",
    description="Turns transcribed voice notes into dated, prioritised to-do items.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["*"]
)


@app.post("/extract-tasks", response_model=TasksOutput)
async def extract_tasks(payload: TextInput, request: Request) -> TasksOutput:
    """Extract to-do items from the provided transcription."""

    logger.info(
        "extract_tasks request",
        extra={
            "client": request.client.host if request.client else None,
            "text_length": len(payload.text),
            "existing_tasks": len(payload.existing_tasks),
        },
    )
    try:
        tasks = extractor.extract_tasks(payload.text, now=payload.reference_time)
        new_tasks = filter_new_tasks(tasks, payload.existing_tasks)
    except Exception as exc:
        logger.exception("Unexpected extraction failure")
        raise HTTPException(status_code=500, detail="Internal error during extraction") from exc

    logger.info(
        "extraction completed",
        extra={"tasks_count": len(tasks), "new_tasks_count": len(new_tasks)},
    )
    return TasksOutput(tasks=[ExtractedTaskModel.from_entity(task) for task in new_tasks])


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health-check endpoint used by orchestration."""

    return HealthResponse(status="ok")
