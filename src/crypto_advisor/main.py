"""Main module for the AI crypto advisor service."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from crypto_advisor.config import get_settings
from crypto_advisor.container import Container, init_container
from crypto_advisor.db import EmailAlreadyExistsError
from crypto_advisor.db.sessions import init_db
from crypto_advisor.routers import (auth_router, dashboard_router,
                                    feedback_router, onboarding_router,
                                    users_router)
from crypto_advisor.utils import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Create tables at startup; close provider HTTP clients on shutdown."""
    container: Container = fastapi_app.state.container
    configure_logging(container.settings().log_level)
    init_db(container.engine())
    logger.info("Started %s", container.settings().app_name)

    yield

    await container.dashboard_service().close()


async def email_exists_handler(request: Request, exc: EmailAlreadyExistsError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": "Email already exists"})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI app around container (a fresh one by default)."""
    fastapi_app = FastAPI(
        title="AI Crypto Advisor",
        description="Personalised crypto dashboard: prices, news, AI insight and memes",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container or init_container()

    fastapi_app.add_exception_handler(EmailAlreadyExistsError, email_exists_handler)
    fastapi_app.add_exception_handler(SQLAlchemyError, database_error_handler)

    fastapi_app.include_router(auth_router)
    fastapi_app.include_router(onboarding_router)
    fastapi_app.include_router(dashboard_router)
    fastapi_app.include_router(feedback_router)
    fastapi_app.include_router(users_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    settings = get_settings()
    uvicorn.run("crypto_advisor.main:app", host=settings.host, port=settings.port)


def run_dev():
    """Run the development server with auto-reload."""
    settings = get_settings()
    uvicorn.run("crypto_advisor.main:app", host=settings.host, port=settings.port, reload=True)
