import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from focusday.api.routes import router as api_router
from focusday.config.settings import get_settings
from focusday.storage.cache import PlanCache, get_cache
from focusday.storage.database import init_db
from focusday.utils.logging_config import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"Starting {settings.app_name}...")
    init_db()
    logger.info("Database initialized")
    logger.info(f"Breaks: {settings.break_minutes} min after {settings.break_after_minutes} min of focus")
    logger.info(f"Plan cache: {'redis' if get_cache() is not None else 'disabled'}")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    description="Single-day planner: orders tasks, places focus blocks and breaks in a day window",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1", tags=["planning"])


@app.get("/health", tags=["health"])
def health_check(cache: Optional[PlanCache] = Depends(get_cache)):
    """
    Health check endpoint for monitoring and load balancers.

    Reports the plan cache as "disabled", "ok" or "unavailable" next to the
    service status.
    """
    if cache is None:
        cache_state = "disabled"
    elif cache.health_check():
        cache_state = "ok"
    else:
        logger.warning("Plan cache unreachable")
        cache_state = "unavailable"
    return {"status": "ok", "app": settings.app_name, "version": "1.0.0", "cache": cache_state}
