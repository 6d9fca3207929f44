# /assets/{path}: capa de transporte sobre http_cache
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from webembed.api.caching.headers import incoming_request
from webembed.api.caching.http_cache import (
    IncomingRequest,
    Method,
    ResponseDescriptor,
    method_allowed,
    respond,
)
from webembed.api.caching.registry import AssetRegistry
from webembed.api.deps import get_registry
from webembed.api.services import metrics

router = APIRouter()

# Route de Starlette sin `methods`: cualquier método (TRACE, PURGE, "get"...) llega
# al handler y el 501 lo decide http_cache, nunca un 405 del router.
ASSETS_PATH = "/assets/{asset_path:path}"


def _registry(request: Request) -> AssetRegistry:
    # Sin Depends: respetamos dependency_overrides a mano
    provider = request.app.dependency_overrides.get(get_registry, get_registry)
    return provider()


def _count(descriptor: ResponseDescriptor) -> None:
    if descriptor.status == 304:
        metrics.inc("assets_not_modified_total", 1)
    elif descriptor.status == 200:
        metrics.inc("assets_full_total", 1)
        if "Content-Encoding" in descriptor.headers:
            metrics.inc("assets_gzip_total", 1)


def to_response(descriptor: ResponseDescriptor, *, method: Method, vary: bool) -> Response:
    headers = dict(descriptor.headers)
    media_type = headers.pop("Content-Type", None)
    if vary and descriptor.status == 200:
        headers["Vary"] = "Accept-Encoding"

    if method is Method.HEAD:
        # HEAD: mismas cabeceras y status, sin cuerpo
        if descriptor.status == 200:
            headers["Content-Length"] = str(len(descriptor.body))
        return Response(status_code=descriptor.status, headers=headers, media_type=media_type)

    return Response(
        content=descriptor.body,
        status_code=descriptor.status,
        headers=headers,
        media_type=media_type,
    )


def serve_asset(request: Request) -> Response:
    asset_path: str = request.path_params["asset_path"]
    request.state.asset_path = asset_path
    incoming: IncomingRequest = incoming_request(request.method, request.headers)

    if not method_allowed(incoming):
        metrics.inc("assets_not_implemented_total", 1)
        return Response(status_code=501)

    resource = _registry(request).get(asset_path)
    if resource is None:
        metrics.inc("assets_not_found_total", 1)
        raise HTTPException(status_code=404, detail=f"No encontrado: {asset_path}")

    descriptor = respond(incoming, resource)
    _count(descriptor)
    return to_response(
        descriptor,
        method=incoming.method,
        vary=resource.body_alt_encoded is not None,
    )


router.add_route(ASSETS_PATH, serve_asset, methods=None, name="serve_asset", include_in_schema=False)
