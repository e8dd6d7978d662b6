# FastAPI entry point; wires the catalog, the user store and the routers
# leetlog/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from leetlog.endpoints import (
    problems as problems_router,
    users as users_router,
    leaderboard as leaderboard_router,
)
from leetlog.exceptions import ActivityLogError
from leetlog.services.catalog_service import catalog_service
from leetlog.services.user_store import SqlUserStore, build_user_store
from leetlog.state_manager import activity_service
from leetlog.utils.config import settings
from leetlog.utils.logger import logger

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    logger.info(f"{settings.APP_NAME} API starting up...")

    logger.info("Loading problem catalog...")
    catalog_service.load_problems(settings.CATALOG_FILE_PATH)

    store = build_user_store()
    if isinstance(store, SqlUserStore):
        # Create database tables if they don't exist
        await store.create_schema()
    activity_service.use_store(store)

    logger.info("Startup complete.")
    yield
    # On shutdown
    await store.close()
    logger.info(f"{settings.APP_NAME} API shutting down...")

# --- FastAPI App Initialization ---
app = FastAPI(
    title="LeetLog API",
    description="Daily problem-solving log with streaks, stats and a leaderboard.",
    version="1.0.0",
    lifespan=lifespan
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this to your frontend's domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Core Failures ---
@app.exception_handler(ActivityLogError)
async def activity_log_error_handler(request: Request, exc: ActivityLogError):
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "message": exc.message, "details": exc.details},
    )

# --- API Routers ---
app.include_router(problems_router.router, prefix="/problems", tags=["Problems"])
app.include_router(users_router.router, prefix="/users", tags=["Users"])
app.include_router(leaderboard_router.router, prefix="/leaderboard", tags=["Leaderboard"])

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {"message": "Welcome to the LeetLog API"}
