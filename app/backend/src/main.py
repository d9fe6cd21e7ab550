import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from src.api import project_types, report_templates, reports
from src.core.config import get_settings
from src.core.lifespan import lifespan
from src.core.logging_config.middleware import LoggingMiddleware
from src.core.rate_limit import general_limit, limiter, limiter_authenticated
from src.db.session import get_async_sessionmaker
from src.version import __version__

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Report Templates API",
    description="Report templates, submissions and their review workflow",
    version=__version__,
    debug=get_settings().LOG_LEVEL == "DEBUG",
    openapi_url="/api/v1/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.state.limiter_authenticated = limiter_authenticated
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LoggingMiddleware)

app.include_router(project_types.router)
app.include_router(report_templates.router)
app.include_router(reports.router)


@app.get("/health_check")
@limiter.limit(general_limit)
async def health_check(request: Request, check_db: bool = False) -> dict[str, str | bool]:
    """Health check endpoint to verify API is running.

    Args:
        check_db: If True, also checks database connectivity
    """
    settings = get_settings()
    result: dict[str, str | bool] = {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
    }

    if check_db:
        try:
            session_factory = get_async_sessionmaker()
            async with session_factory() as session:
                await session.execute(text("SELECT 1"))
                result["database"] = "connected"
        except Exception as e:
            logger.exception("Database health check failed")
            result["status"] = "unhealthy"
            result["database"] = "disconnected"
            result["error"] = str(e)

    return result
