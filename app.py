#!/usr/bin/env python3
"""
Main entry point for the shortlink service.

Concurrency: one uvicorn process serves every request with async handlers
sharing one LinkRegistry. Scale out by running more processes only with the
postgres backend; the memory and file backends live inside a single process.

Usage:
    python app.py

Environment variables:
    STORAGE_BACKEND - memory, file or postgres
    DATA_FILE - Journal path for the file backend
    DATABASE_URL - PostgreSQL connection URL
    BASE_URL - Base URL for short links
    CODE_LENGTH - Length of generated codes (3-32)
    PORT - Port to listen on
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlink.codegen import CodeGenerator
from shortlink.common.logging_config import setup_logging
from shortlink.service import LinkRegistry
from shortlink.storage import create_store
from web_app import create_app


def build_registry(config: Config, store) -> LinkRegistry:
    """Wire a registry around an already constructed store."""
    return LinkRegistry(
        store=store,
        base_url=config.base_url,
        generator=CodeGenerator(default_length=config.code_length),
        max_attempts=config.max_collision_retries,
        timeout=config.operation_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store and registry on startup, close the store on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info(f"Starting shortlink with {config.storage_backend} storage...")

    store = create_store(config, logger=logger.getChild("storage"))
    registry = build_registry(config, store)

    app.state.store = store
    app.state.registry = registry

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down shortlink...")
    await registry.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("shortlink service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    app = create_app(
        store_instance=None,  # Set in lifespan
        registry_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except OSError as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
