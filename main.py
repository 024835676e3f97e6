import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from privalytics_app.config import settings
from privalytics_app.logging_config import configure_logging
from privalytics_app.dependencies import get_database
from privalytics_app.middleware import BodySizeLimitMiddleware
from privalytics_app.api import track, sites, pages

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open (load or create) the database before serving requests"""
    # Honour test overrides so startup never touches the default file
    database_provider = app.dependency_overrides.get(get_database, get_database)
    database_provider()
    logger.info(f"{settings.app_name} running on http://{settings.host}:{settings.port}")
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Cookie-less pageview analytics collector",
    debug=settings.debug,
    lifespan=lifespan
)

app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """Render errors as {"error": "..."}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(track.router)
app.include_router(sites.router)
app.include_router(pages.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
