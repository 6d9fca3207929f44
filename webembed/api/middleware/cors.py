# CORS sin preflight bajo /assets
from __future__ import annotations

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class AssetsCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware que no contesta preflights bajo `passthrough_prefix`.

    /assets sólo sirve GET y HEAD (peticiones simples, sin preflight). Un
    OPTIONS ahí llega al handler y recibe 501 como cualquier otro método;
    las cabeceras CORS de respuesta se siguen añadiendo.
    """

    def __init__(self, app: ASGIApp, *, passthrough_prefix: str = "/assets/", **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.passthrough_prefix = passthrough_prefix

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].startswith(self.passthrough_prefix):
            await self.simple_response(scope, receive, send, request_headers=Headers(scope=scope))
            return
        await super().__call__(scope, receive, send)
