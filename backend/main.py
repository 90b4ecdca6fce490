import logging
from contextlib import asynccontextmanager

from api.routes import categories
from config import AppMode, get_settings
from db.database import init_db
from fastapi import APIRouter, FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from middleware.content_type import ContentTypeValidationMiddleware
from schemas.common import HealthResponse
from services.error_sanitizer import sanitize_for_json
from starlette.requests import Request

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Silence noisy loggers
logging.getLogger("aiosqlite").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown"""
    logger.info(f"Starting Category Admin in {settings.APP_MODE.value} mode...")

    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down Category Admin...")


app = FastAPI(
    title="Category Admin",
    description="Product category management for the e-commerce admin",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    safe_errors = sanitize_for_json(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": safe_errors},
    )


# Middlewares (order matters - first added = last executed)
app.add_middleware(ContentTypeValidationMiddleware)

# Request logging (development only)
if settings.APP_MODE == AppMode.DEV:
    from middleware.logging import RequestLoggingMiddleware, configure_request_logging

    configure_request_logging(settings.LOG_LEVEL)
    app.add_middleware(RequestLoggingMiddleware)

# CORS middleware - must be last (first to process incoming requests)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(categories.router)
app.include_router(api_v1_router)

# Backward compatibility: also mounted at /api/ (deprecated)
api_compat_router = APIRouter(prefix="/api", deprecated=True)
api_compat_router.include_router(categories.router)
app.include_router(api_compat_router)


@app.get("/")
async def root():
    return {
        "name": "Category Admin API",
        "version": "1.0.0",
        "docs": "/docs",
        "categories": "/api/v1/categories",
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(mode=settings.APP_MODE.value)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=(settings.APP_MODE == AppMode.DEV),
    )
