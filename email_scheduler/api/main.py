"""
FastAPI application entry point.

Schedules emails for later delivery. The dispatcher tick loop runs inside
the application's event loop, started and stopped by the lifespan.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from email_scheduler import __version__
from email_scheduler.infra.data_paths import (
    get_emails_file_path,
    get_scheduler_interval,
    is_scheduler_enabled,
)
from email_scheduler.scheduler.errors import StorageError
from email_scheduler.scheduler.validation import MSG_MISSING_FIELDS
from .routers import emails
from .schemas.emails import SchedulerStatsResponse, MessageResponse
from ._scheduler_state import (
    init_scheduler_service,
    get_scheduler_service,
    shutdown_scheduler_service,
)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: create the scheduler service, start the dispatcher
      (unless SCHEDULER_ENABLED=false)
    - Shutdown: stop the dispatcher
    """
    service = init_scheduler_service(
        data_file=get_emails_file_path(),
        poll_interval=get_scheduler_interval(),
    )

    if is_scheduler_enabled():
        service.start()
    else:
        logger.info("Scheduler disabled via SCHEDULER_ENABLED, dispatcher not started")

    yield

    await shutdown_scheduler_service()


tags_metadata = [
    {
        "name": "emails",
        "description": "Schedule emails for later delivery and list scheduled emails",
    },
    {
        "name": "scheduler",
        "description": "Dispatcher status",
    },
]

app = FastAPI(
    title="Email Scheduler API",
    lifespan=lifespan,
    description="""
## Email Scheduler API

Accepts emails to be sent at a future time and delivers them once per
minute when due.

### Usage
```bash
# Start server
python main.py --port 3001

# Schedule an email
curl -X POST http://localhost:3001/schedule \\
  -H "Content-Type: application/json" \\
  -d '{"recipientEmail": "a@b.com", "subject": "Hi", "body": "Test", "scheduledTime": "2030-01-01T09:00:00Z"}'
```
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a client error with the usual message shape."""
    logger.debug(f"Rejected request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"message": MSG_MISSING_FIELDS})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    try:
        running = get_scheduler_service().is_running
    except RuntimeError:
        running = False
    return {"status": "ok", "version": __version__, "scheduler_running": running}


@app.get(
    "/scheduler/status",
    response_model=SchedulerStatsResponse,
    tags=["scheduler"],
    responses={500: {"model": MessageResponse}},
)
async def scheduler_status():
    """
    Get dispatcher status and email counts.

    Returns:
    - total / pending / sent: counts over the stored collection
    - scheduler_running: whether the tick loop is active
    - poll_interval_seconds: tick interval
    """
    try:
        stats = await get_scheduler_service().get_stats()
    except StorageError as e:
        logger.error(f"Error reading scheduler status: {e}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    return SchedulerStatsResponse(**stats)


app.include_router(emails.router, tags=["emails"])


if __name__ == "__main__":
    import uvicorn
    from email_scheduler.infra.data_paths import get_host, get_port
    uvicorn.run(app, host=get_host(), port=get_port())
