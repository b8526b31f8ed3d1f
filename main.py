#!/usr/bin/env python3

"""
Main application entry point for the Taskboard API.

Architecture: FastAPI application with an async SQL database, bcrypt password
hashing and stateless bearer tokens.
"""

import sys
from contextlib import asynccontextmanager
from datetime import timedelta

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.auth import router as auth_router
from taskboard.api.errors import register_exception_handlers
from taskboard.api.http import router as http_router
from taskboard.api.middleware import register_middleware
from taskboard.api.tasks import router as tasks_router
from taskboard.config import Settings, settings
from taskboard.db import check_db_connection, close_db, init_db
from taskboard.utils.auth import PasswordHasher, TokenService
from taskboard.utils.logger import setup_logger

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the process-wide auth components and make sure the database is usable."""
    logger.info("Application startup...")
    app_settings: Settings = app.state.settings
    try:
        app.state.token_service = TokenService(
            app_settings.jwt_secret,
            algorithm=app_settings.jwt_algorithm,
            ttl=timedelta(minutes=app_settings.access_token_expire_minutes),
        )
        app.state.password_hasher = PasswordHasher()

        logger.info("Initializing database...")
        await init_db()
        await check_db_connection()
        logger.info("Database connectivity confirmed.")
    except Exception as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info("Taskboard API startup successful.")
    yield

    logger.info("Taskboard API shutdown...")
    await close_db()
    logger.info("Shutdown complete.")


def create_app(app_settings: Settings = settings) -> FastAPI:
    app = FastAPI(title="Taskboard API", lifespan=lifespan)
    app.state.settings = app_settings

    register_exception_handlers(app)
    register_middleware(app)

    app.include_router(http_router)
    app.include_router(auth_router)
    app.include_router(tasks_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allow_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
    )

    return app


app = create_app()


def main():
    host = settings.server_host
    port = int(settings.server_port)

    logger.info(f"Starting Taskboard API server on {host}:{port}")

    try:
        uvicorn.run(app, host=host, port=port)
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
