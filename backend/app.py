import logging
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime, time

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from db import create_db_engine
from schemas import (
    DeleteResponse,
    HealthResponse,
    MoodCreate,
    MoodResponse,
    StatsResponse,
)
from stats import MoodAggregator
from store import MoodStore

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


def get_store(request: Request) -> MoodStore:
    return request.app.state.store


def get_aggregator(request: Request) -> MoodAggregator:
    return request.app.state.aggregator


def parse_date_bound(value: str | None, end: bool = False) -> datetime | None:
    """Parse a start_date/end_date query value into an aware UTC datetime.

    A bare date used as an end bound covers the whole day. Values without an
    offset are taken as UTC.
    """
    if not value:
        return None
    if len(value) == 10:
        day = date.fromisoformat(value)
        return datetime.combine(day, time.max if end else time.min, tzinfo=UTC)
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400 with a readable message."""
    errors = exc.errors()
    message = _describe_validation_error(errors[0]) if errors else "Invalid request"
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"detail": message})


def _describe_validation_error(error: dict) -> str:
    loc = [part for part in error.get("loc", ()) if part != "body"]
    field = str(loc[-1]).replace("_", " ").capitalize() if loc else "Request body"
    if error.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    if error.get("type") == "missing":
        return f"{field} is required"
    if error.get("type") == "value_error":
        # Messages raised by our own validators are already phrased for the client
        return error["msg"].removeprefix("Value error, ")
    return f"{field}: {error['msg']}"


def create_app(store: MoodStore | None = None, aggregator: MoodAggregator | None = None) -> FastAPI:
    """Build the API around an injected store.

    When no store is given one is created from the environment configuration.
    """
    if store is None:
        store = MoodStore(create_db_engine())
    if aggregator is None:
        aggregator = MoodAggregator(store.engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Ensure the schema exists before serving."""
        try:
            app.state.store.initialize()
        except Exception as e:
            # Keep serving; requests touching the store will fail with 500
            logger.error(f"Database initialization error: {str(e)}")
        yield

    app = FastAPI(title="Mood Tracker API", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.state.aggregator = aggregator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials="*" not in config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/api/health", response_model=HealthResponse)
    def health(store: MoodStore = Depends(get_store)):
        """Liveness check; also reports whether the database is reachable."""
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(UTC),
            database="ok" if store.ping() else "unavailable",
        )

    @app.get("/api/moods", response_model=list[MoodResponse])
    def list_moods(
        start_date: str = Query(None, description="Only entries created at or after this date/time"),
        end_date: str = Query(None, description="Only entries created at or before this date/time"),
        store: MoodStore = Depends(get_store),
    ):
        """Get entries newest first, with optional created_at filtering."""
        logger.info(f"Moods request - from: {start_date}, to: {end_date}")

        try:
            start = parse_date_bound(start_date)
            end = parse_date_bound(end_date, end=True)
        except ValueError as e:
            logger.info(f"Invalid date filter: {str(e)}")
            raise HTTPException(
                status_code=400, detail="Invalid date format. Use ISO-8601, e.g. YYYY-MM-DD"
            ) from e

        try:
            entries = store.list(start, end)
            return [MoodResponse.model_validate(entry, from_attributes=True) for entry in entries]
        except Exception as e:
            logger.error(f"Error fetching moods: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to fetch moods") from e

    @app.get("/api/moods/stats", response_model=StatsResponse)
    def get_stats(aggregator: MoodAggregator = Depends(get_aggregator)):
        """Mood frequencies, average energy and the last 7 days by date."""
        logger.info("Stats request")

        try:
            return StatsResponse.model_validate(aggregator.summary())
        except Exception as e:
            logger.error(f"Error fetching stats: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to fetch stats") from e

    @app.post("/api/moods", response_model=MoodResponse, status_code=201)
    def create_mood(request: MoodCreate, store: MoodStore = Depends(get_store)):
        """Log a new mood entry."""
        logger.info(f"Create mood request: mood={request.mood}, energy_level={request.energy_level}")

        try:
            entry = store.insert(request.mood, note=request.note, energy_level=request.energy_level)
        except Exception as e:
            logger.error(f"Error creating mood: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create mood entry") from e

        logger.info(f"Created mood entry {entry.id}")
        return MoodResponse.model_validate(entry, from_attributes=True)

    @app.delete("/api/moods/{mood_id}", response_model=DeleteResponse)
    def delete_mood(mood_id: int, store: MoodStore = Depends(get_store)):
        """Delete a specific entry by ID."""
        logger.info(f"Delete mood request for ID: {mood_id}")

        try:
            deleted = store.delete_by_id(mood_id)
        except Exception as e:
            logger.error(f"Error deleting mood: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to delete mood") from e

        if deleted is None:
            raise HTTPException(status_code=404, detail="Mood not found")

        logger.info(f"Successfully deleted mood {mood_id}")
        return DeleteResponse(
            message="Mood deleted",
            deleted=MoodResponse.model_validate(deleted, from_attributes=True),
        )

    @app.get("/")
    def root():
        """Root endpoint."""
        return {"message": "Mood Tracker API", "docs": "/docs"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=config.HOST, port=config.PORT)
