"""
FastAPI Application Entry Point

Carbon Trace API - order tracking with an AI prompt proxy.
Uses Gemini when GOOGLE_API_KEY is set, local fallback answers otherwise.

Endpoints:
    - /api/orders: Order CRUD
    - /api/prompts: AI prompt proxy
    - /api/health: System health check
    - /*: Static front-end (public/, plus build/ in production)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from carbon_trace.core.config import Settings, get_settings, setup_logging
from carbon_trace.database import create_engine, create_session_maker, init_db
from carbon_trace.frontend import register_frontend
from carbon_trace.routes import router
from carbon_trace.services.ai import BaseAIService, PromptProxy, create_ai_service

logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    # A broken database file is logged, not fatal
    try:
        await init_db(app.state.engine)
        logger.info("✅ Database initialized")
    except Exception as e:
        logger.exception(f"❌ Error opening database: {e}")

    logger.info(f"✅ AI Service: {app.state.prompt_proxy.provider_name}")

    if not settings.has_ai_credential:
        logger.warning("⚠️ GOOGLE_API_KEY environment variable is not set or is using the default value.")
        logger.warning("⚠️ AI features will use fallback responses instead of real AI calculations.")

    logger.info("=" * 60)
    logger.info(f"✅ Application ready on port {settings.api_port}")
    logger.info("=" * 60)

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down server...")
    await app.state.engine.dispose()
    logger.info("✅ Database connection closed")


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and path ids are client errors."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))

    return JSONResponse(
        status_code=400,
        content={"error": "; ".join(messages) or "Invalid request"},
    )


def build_exception_handler(settings: Settings):
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        logger.exception(f"Unhandled exception: {exc}")

        return JSONResponse(
            status_code=500,
            content={
                "error": str(exc) if settings.debug else "An unexpected error occurred",
            },
        )

    return global_exception_handler


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    ai_service: Optional[BaseAIService] = None,
) -> FastAPI:
    """
    Build the application and its long-lived dependencies.

    Args:
        settings: Configuration (defaults to environment settings)
        ai_service: Override for the AI service (defaults to the factory choice)

    Returns:
        FastAPI: Ready-to-serve application
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Order tracking with carbon savings and an AI prompt proxy.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = create_engine(settings.database_url, echo=settings.database_echo)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)
    app.state.prompt_proxy = PromptProxy(ai_service or create_ai_service(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, build_exception_handler(settings))

    app.include_router(router)
    register_frontend(app, settings)

    return app


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
