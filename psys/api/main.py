"""
FastAPI Main Application
PSYS Index Engine API
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from psys.api.routes import health, indices
from psys.api.middleware.logging import LoggingMiddleware
from psys.api.middleware.error_handler import (
    psys_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler
)
from psys.services.index_service import get_index_service
from psys.utils.config import settings
from psys.utils.logger import get_logger
from psys.utils.exceptions import PSYSException

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager
    Handles startup and shutdown events
    """
    logger.info("=" * 70)
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info("=" * 70)

    get_index_service()

    logger.info(f"API ready at http://{settings.HOST}:{settings.PORT}")
    logger.info(f"Docs available at http://{settings.HOST}:{settings.PORT}/docs")

    yield

    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
# PSYS Index Engine API

Derives seven bounded psychometric indices from a Big Five assessment.

## Indices
- **Difference**: self-report vs. perceived presentation
- **Kernel Stability**: consistency across sources, time and context
- **Self-Integration**: congruence of self-view and presentation
- **Circularity** (structural / potential): balance of the derived vectors
- **Completeness**: coverage of per-dimension targets
- **Confidence**: disposition, evidence and consistency

Every index reports an integer value 0-100, a label, diagnostic signals and
a reliability tag (low / mid / high) reflecting whether inputs were real
answers or neutral defaults.

## API Endpoints
- `POST /api/v1/indices/compute`: Compute all indices
- `POST /api/v1/indices/map`: Map Big Five scores to derived vectors
- `GET /api/v1/indices/config`: Default configuration
- `GET /api/v1/health`: Health check
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    debug=settings.DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else settings.CORS_ORIGINS,
    allow_credentials=False if settings.is_development else settings.CORS_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LoggingMiddleware)

# Exception Handlers
app.add_exception_handler(PSYSException, psys_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Routers
app.include_router(health.router, prefix=settings.API_V1_PREFIX)
app.include_router(indices.router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """API info"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": f"{settings.API_V1_PREFIX}/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "psys.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        workers=settings.WORKERS if not settings.RELOAD else 1,
        log_level=settings.LOG_LEVEL.lower()
    )
