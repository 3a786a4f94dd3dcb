import os
from pathlib import Path

from fastapi import FastAPI
from loguru import logger

from core.exceptions import SbomStorageError
from core.logging_config import setup_logging
from core.settings import get_settings
from services.api.exception_handlers import storage_exception_handler, unhandled_exception_handler
from services.api.routes import router as storage_router


def create_app() -> FastAPI:
    # Setup structured logging
    json_logging = os.getenv("JSON_LOGGING", "false").lower() in {"true", "1", "yes"}
    log_level = os.getenv("LOG_LEVEL", "INFO")
    log_file = os.getenv("LOG_FILE")
    setup_logging(
        level=log_level,
        json_format=json_logging,
        log_file=Path(log_file) if log_file else None,
    )

    app = FastAPI(
        title="SBOM Storage API",
        version="0.1.0",
        description="Operations for uploading SBOMs and retrieving permanent download links.",
    )

    @app.on_event("startup")
    async def _load_settings() -> None:
        settings = get_settings()
        logger.info(
            "API initialised with storage backend={backend} bucket={bucket} public_url={public_url}",
            backend=settings.storage.backend,
            bucket=settings.storage.bucket,
            public_url=settings.api.public_url,
        )

    @app.get("/healthz", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    # Register exception handlers
    app.add_exception_handler(SbomStorageError, storage_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(storage_router)

    return app


app = create_app()


__all__ = ["app", "create_app"]
