"""
Parsers de cabeceras de request.

Funciones puras y totales: un valor ilegible se trata como ausente (None),
nunca como error.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timezone
from email.utils import parsedate_to_datetime

from webembed.api.caching.http_cache import IncomingRequest, Method

_WEAK_PREFIX = "W/"


def _parse_entity_tag(token: str) -> str | None:
    t = token.strip()
    if t.startswith(_WEAK_PREFIX):
        t = t[len(_WEAK_PREFIX):]
    if len(t) < 2 or t[0] != '"' or t[-1] != '"':
        return None
    inner = t[1:-1]
    if '"' in inner:
        return None
    return inner


def parse_if_none_match(raw: str | None) -> set[str] | None:
    if not raw:
        return None
    tags = {tag for tag in map(_parse_entity_tag, raw.split(",")) if tag is not None}
    return tags or None


def parse_if_unmodified_since(raw: str | None) -> int | None:
    if not raw or not raw.strip():
        return None
    try:
        dt = parsedate_to_datetime(raw.strip())
    except (TypeError, ValueError, IndexError):
        return None
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def _quality(params: list[str]) -> float:
    for param in params:
        name, _, value = param.partition("=")
        if name.strip().lower() == "q":
            try:
                return float(value.strip())
            except ValueError:
                return 0.0
    return 1.0


def accepts_gzip(raw: str | None) -> bool:
    if not raw:
        return False
    for item in raw.split(","):
        coding, *params = item.split(";")
        if coding.strip().lower() == "gzip":
            return _quality(params) > 0.0
    return False


def parse_method(raw: str) -> Method:
    if raw == "GET":
        return Method.GET
    if raw == "HEAD":
        return Method.HEAD
    return Method.OTHER


def incoming_request(method: str, headers: Mapping[str, str]) -> IncomingRequest:
    """Vista de sólo-lectura de la request; `headers` debe ser case-insensitive."""
    return IncomingRequest(
        method=parse_method(method),
        if_none_match=parse_if_none_match(headers.get("if-none-match")),
        if_unmodified_since=parse_if_unmodified_since(headers.get("if-unmodified-since")),
        accepts_alt_encoding=accepts_gzip(headers.get("accept-encoding")),
    )
