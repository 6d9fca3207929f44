from __future__ import annotations

from webembed.api.middleware.cors import AssetsCORSMiddleware
from webembed.api.middleware.errors import build_exception_handler
from webembed.api.middleware.request_id import build_request_id_middleware

__all__ = ["AssetsCORSMiddleware", "build_exception_handler", "build_request_id_middleware"]
