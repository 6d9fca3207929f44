from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response

from webembed.api.caching.registry import AssetRegistry
from webembed.api.deps import get_registry
from webembed.api.services import metrics

router = APIRouter()


@router.get("/health")
def health() -> dict[str, Any]:
    return {"ok": True, "ts": datetime.now(timezone.utc).isoformat()}


@router.get("/ready")
def ready(registry: AssetRegistry = Depends(get_registry)) -> dict[str, Any]:
    """
    Readiness:
    - el directorio de assets existe.
    - los assets se pueden leer (fuerza la carga perezosa del registro).
    """
    if not registry.root.is_dir():
        raise HTTPException(
            status_code=503,
            detail={"ready": False, "issues": {"assets_dir": f"missing: {registry.root}"}},
        )

    try:
        count = len(registry.paths())
    except OSError as exc:
        raise HTTPException(
            status_code=503,
            detail={"ready": False, "issues": {"assets_dir": f"unreadable: {registry.root} ({exc!r})"}},
        )

    return {"ready": True, "assets": count, "ts": datetime.now(timezone.utc).isoformat()}


@router.get("/metrics")
def metrics_endpoint() -> Response:
    body = metrics.render_prometheus()
    return Response(content=body, media_type="text/plain; version=0.0.4")
