from __future__ import annotations

from fastapi import FastAPI

from webembed.api.deps import get_settings
from webembed.api.middleware import (
    AssetsCORSMiddleware,
    build_exception_handler,
    build_request_id_middleware,
)
from webembed.api.routers.assets import router as assets_router
from webembed.api.routers.health import router as health_router
from webembed.api.routers.meta import router as meta_router

_settings = get_settings()


def create_app() -> FastAPI:
    app = FastAPI(title="webembed static assets", version="0.1.0")

    # Sin GZipMiddleware: /assets ya negocia su propio cuerpo gzip precomputado.
    app.add_middleware(
        AssetsCORSMiddleware,
        passthrough_prefix="/assets/",
        allow_origins=_settings.cors_allow_origins(),
        allow_credentials=_settings.cors_allow_credentials,
        allow_methods=["GET", "HEAD"],
        allow_headers=["*"],
        expose_headers=["ETag", "Last-Modified", "X-Request-ID"],
    )

    app.middleware("http")(build_request_id_middleware(_settings))
    app.add_exception_handler(Exception, build_exception_handler(_settings))

    app.include_router(health_router)
    app.include_router(meta_router)
    app.include_router(assets_router)

    return app


app = create_app()
