"""FastAPI application factory for the link validation service.

Routes
------
    POST /ping     — validate a chunk of link groups (NDJSON streaming)
    GET  /health   — liveness check
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkaudit.api.routers import ping as ping_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Link Audit Validation Service",
        description=(
            "Checks external URLs found in rich-text content and streams "
            "the result for each content item as soon as it is known."
        ),
        version="0.1.0",
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(ping_router.router, tags=["validation"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn linkaudit.api.app:app --port 3000
app = create_app()
