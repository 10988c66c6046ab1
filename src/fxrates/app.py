# src/fxrates/app.py
"""
Application Entry Point - Service Initialization and Startup

This module serves as the composition root for the FX rates service.
It wires the rate store into the HTTP application and starts the server.

Files that USE this module:
- python -m fxrates (module entry point)
- fxrates console script

Files that this module USES:
- fxrates.shared.logging_conf (setup_logging for logging configuration)
- fxrates.config (settings for configuration management)
- fxrates.adapters.persistence.file_store (RateFileStore backing the API)
- fxrates.adapters.http.server (build_application for the FastAPI app)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors
import os  # Operating system interface for the working directory

import uvicorn  # ASGI server running the FastAPI application
from fastapi import FastAPI  # Application type returned by the factory

from fxrates.shared.logging_conf import setup_logging  # Configure logging with file rotation
from fxrates.adapters.persistence.file_store import RateFileStore  # JSON file backing the API
from fxrates.adapters.http.server import build_application  # FastAPI app factory


def create_app() -> FastAPI:
    """
    Build the application from settings.

    Usable as ``uvicorn fxrates.app:create_app --factory``.
    """
    from fxrates.config import settings

    store = RateFileStore(settings.rates_file)
    return build_application(store)


def main() -> None:
    """
    Initialize and start the HTTP service.

    This function:
    1. Sets up logging from settings
    2. Builds the FastAPI app around the configured rates file
    3. Serves it with uvicorn on the configured host and port
    """
    # Import settings here so configuration errors surface after logging is possible
    from fxrates.config import settings

    setup_logging(
        level=settings.log_level_value,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_to_stdout=settings.log_stdout,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger = logging.getLogger(__name__)

    logger.info("Working directory: %s", os.getcwd())
    logger.info("Rates file: %s", settings.rates_file.resolve())

    app = create_app()

    logger.info("Starting FX rates service on %s:%d", settings.host, settings.port)
    try:
        # log_config=None keeps uvicorn on the handlers configured above
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    except KeyboardInterrupt:
        logger.info("Service stopped by user (KeyboardInterrupt)")
    except Exception as e:
        logger.exception("Unexpected error while serving: %s (type: %s)", e, type(e).__name__)
        raise


if __name__ == "__main__":
    main()
