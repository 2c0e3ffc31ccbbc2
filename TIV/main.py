from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Core imports
from packages.tiv_core.errors import TIVBaseError
from packages.tiv_core.logging import get_logger, setup_logging

# API
from TIV.api.dependencies import get_config
from TIV.api.error_handler import (
    tiv_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)
from TIV.api.request_id import RequestIdMiddleware
from TIV.api.health import router as health_router
from TIV.api.interview import router as interview_router
from TIV.api.resume import router as resume_router
from TIV.api.candidates import router as candidates_router

# Configuration Load
config = get_config()
setup_logging(config.LOG_DIR if config.LOG_TO_FILE else None)
logger = get_logger("TIV.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {config.PROJECT_NAME} v{config.VERSION}...")
    if not config.GEMINI_API_KEY or config.ORACLE_PROVIDER == "mock":
        logger.warning("Oracle running on the mock provider (no GEMINI_API_KEY or ORACLE_PROVIDER=mock).")

    yield

    # Shutdown
    logger.info("Server shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=config.PROJECT_NAME,
        version=config.VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url=None
    )

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    # Error handlers
    app.add_exception_handler(TIVBaseError, tiv_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routers
    app.include_router(health_router, prefix="", tags=["Status"])
    app.include_router(interview_router, prefix="/api")
    app.include_router(resume_router, prefix="/api")
    app.include_router(candidates_router, prefix="/api")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("TIV.main:app", host="0.0.0.0", port=8000, reload=True)
