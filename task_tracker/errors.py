import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "404 page not found"


class TaskTrackerError(Exception):
    status_code = 500


class BadRequest(TaskTrackerError):
    """The request body could not be decoded into a task."""

    status_code = 400


class NotFound(TaskTrackerError):
    """No task matches the requested id."""

    status_code = 404

    def __init__(self, task_id: str):
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class StoreError(TaskTrackerError):
    """Any failure reported by the document store."""

    status_code = 500


class FatalStartupError(TaskTrackerError):
    """The store could not be reached at boot or closed at shutdown."""


async def _task_tracker_error(request: Request, exc: TaskTrackerError):
    if isinstance(exc, NotFound):
        return PlainTextResponse(NOT_FOUND_BODY, status_code=exc.status_code)
    if isinstance(exc, StoreError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    # Store messages are passed through unredacted.
    return PlainTextResponse(str(exc), status_code=exc.status_code)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskTrackerError, _task_tracker_error)
