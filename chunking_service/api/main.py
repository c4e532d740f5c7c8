from __future__ import annotations

from datetime import datetime
from datetime import timezone
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chunking_service.api.routes_chunk import router as chunk_router
from chunking_service.core.config import get_settings
from chunking_service.core.log_config import configure_logging

SERVICE_NAME = "chunking-microservice"

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Starting %s (completion configured: %s, model: %s)",
        SERVICE_NAME,
        settings.completion_configured,
        settings.completion_model,
    )

    app = FastAPI(title="Chunking Microservice", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root() -> dict[str, object]:
        return {
            "status": "OK",
            "service": SERVICE_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {"health": "GET /health", "chunk": "POST /chunk"},
        }

    @app.get("/health")
    def health() -> dict[str, object]:
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "completionConfigured": get_settings().completion_configured,
        }

    app.include_router(chunk_router)
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port, log_level="info")
