from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers.metadata import router as metadata_router
from .core.config import settings
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PromMiddleware, metrics_endpoint

def create_app() -> FastAPI:
    """
    App factory so tests and ASGI servers can instantiate cleanly.
    """
    configure_logging()

    app = FastAPI(
        title="Name Metadata API",
        version="1.0.0",
        description="Deterministic badge images and marketplace metadata for registered names.",
    )

    # Marketplaces and the web client fetch metadata cross-origin.
    allow_origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",")] if settings.ALLOW_ORIGINS else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    app.add_middleware(CorrelationIdMiddleware)
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)

    @app.get("/health", tags=["meta"])
    def health():
        return {"status": "ok"}

    if settings.PROMETHEUS_ENABLED:
        app.add_route("/v1/metrics", metrics_endpoint, methods=["GET"])

    app.include_router(metadata_router, prefix="/metadata", tags=["metadata"])

    return app

app = create_app()
