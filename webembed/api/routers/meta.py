# /meta/assets
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from webembed.api.caching.registry import AssetRegistry
from webembed.api.deps import get_registry

router = APIRouter()


@router.get("/meta/assets")
def meta_assets(registry: AssetRegistry = Depends(get_registry)) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for path in registry.paths():
        record = registry.get(path)
        if record is None:
            continue
        out[path] = {
            "size": len(record.body),
            "gzip_size": len(record.body_alt_encoded) if record.body_alt_encoded is not None else None,
            "etag": record.etag,
            "last_modified": record.last_modified,
            "mime_type": record.mime_type,
        }
    return {"root": str(registry.root), "assets": out}
