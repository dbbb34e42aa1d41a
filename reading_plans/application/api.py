"""FastAPI application entry point."""

import logging
from datetime import date
from typing import Optional

from fastapi import FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import settings
from .controller import build_controller
from ..domain.entities import ErrorKind, GoalMode, ReadingPlanError, ValidationFailed

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app instance
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize controller with the configured providers
controller = build_controller(settings)

ERROR_STATUS = {
    ErrorKind.VALIDATION_FAILED: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE_FAILURE: 503,
}


class CreatePlanRequest(BaseModel):
    """Body of a plan creation request."""
    
    user_id: str
    book_id: str
    title: str
    start_date: date
    goal_mode: GoalMode
    pages_per_day: Optional[int] = None
    end_date: Optional[date] = None
    total_pages: Optional[int] = Field(None, description="Book length; looked up from the catalogue when omitted")


class LogProgressRequest(BaseModel):
    """Body of a progress update against a plan."""
    
    book_id: str
    pages_read: int
    minutes_spent: Optional[int] = None
    notes: Optional[str] = None
    user_id: Optional[str] = None


class LogSessionRequest(LogProgressRequest):
    """Body of a free reading session, optionally attached to a plan."""
    
    plan_id: Optional[str] = None


@app.exception_handler(ReadingPlanError)
async def reading_plan_error_handler(request: Request, exc: ReadingPlanError):
    """Map engine failures to HTTP responses."""
    body = {"kind": exc.kind.value, "message": str(exc)}
    if isinstance(exc, ValidationFailed):
        body["field"] = exc.field
    if exc.kind is ErrorKind.STORAGE_FAILURE:
        logger.error(f"Storage failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=ERROR_STATUS[exc.kind], content=body)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return controller.get_health_status()


@app.post("/reading-plans", status_code=status.HTTP_201_CREATED)
async def create_reading_plan(body: CreatePlanRequest):
    """Create a reading plan from a pages-per-day or finish-by-date goal."""
    return await controller.create_plan(**body.model_dump())


@app.get("/reading-plans")
async def list_reading_plans(user_id: str = Query(..., description="User ID to list plans for")):
    """Get all reading plans of a user with their progress."""
    plans = await controller.list_plans(user_id)
    return {"plans": plans, "user_id": user_id}


@app.get("/reading-plans/{plan_id}")
async def get_reading_plan(plan_id: str):
    """Get a reading plan with its progress and a fresh estimate."""
    return await controller.get_plan(plan_id)


@app.post("/reading-plans/{plan_id}/progress")
async def log_plan_progress(plan_id: str, body: LogProgressRequest):
    """Log a reading session against a plan."""
    return await controller.log_session(plan_id=plan_id, **body.model_dump())


@app.post("/reading-sessions", status_code=status.HTTP_201_CREATED)
async def log_reading_session(body: LogSessionRequest):
    """Log a reading session, attached to a plan or as free reading."""
    return await controller.log_session(**body.model_dump())


@app.get("/koach")
async def get_koach_points(user_id: str = Query(..., description="User ID to total points for")):
    """Get a user's koach point balance."""
    return await controller.get_koach_balance(user_id)
