"""FastAPI application entry point."""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import create_tables, describe_database, dispose_engine
from .errors import register_error_handlers
from .logging_config import setup_logging
from .routers.employees import router as employees_router

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Employee Records API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

api_router = APIRouter(prefix="/api")
api_router.include_router(employees_router)


@api_router.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple readiness probe for uptime checks."""

    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


app.include_router(api_router)


@app.on_event("startup")
async def on_startup() -> None:
    """Ensure database tables exist."""

    await create_tables()
    logger.info("Employee store ready at %s", describe_database())


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await dispose_engine()
