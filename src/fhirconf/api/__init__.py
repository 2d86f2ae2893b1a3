from __future__ import annotations

from fastapi import FastAPI

from ..core.conformance import ServerConformanceProvider
from .routes import mount_conformance_api


def create_api_app(provider: ServerConformanceProvider) -> FastAPI:
    app = FastAPI(title="fhirconf", version="0.1.0")

    mount_conformance_api(app, provider)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    return app
