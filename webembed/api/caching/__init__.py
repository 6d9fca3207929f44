from __future__ import annotations

from webembed.api.caching.headers import incoming_request
from webembed.api.caching.http_cache import (
    ConditionalOutcome,
    EncodingChoice,
    IncomingRequest,
    Method,
    ResponseDescriptor,
    assemble,
    choose_encoding,
    evaluate,
    respond,
)
from webembed.api.caching.registry import AssetRegistry
from webembed.api.caching.resource import ResourceRecord, build_record, record_from_bytes

__all__ = [
    "AssetRegistry",
    "ConditionalOutcome",
    "EncodingChoice",
    "IncomingRequest",
    "Method",
    "ResourceRecord",
    "ResponseDescriptor",
    "assemble",
    "build_record",
    "choose_encoding",
    "evaluate",
    "incoming_request",
    "record_from_bytes",
    "respond",
]
