# ETag/If-Unmodified-Since/304 + negociación gzip
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from webembed.api.caching.resource import ResourceRecord

ALT_ENCODING: Final[str] = "gzip"


class Method(Enum):
    GET = "GET"
    HEAD = "HEAD"
    OTHER = "OTHER"


class ConditionalOutcome(Enum):
    NOT_MODIFIED = "not_modified"
    SEND_FULL = "send_full"


class EncodingChoice(Enum):
    IDENTITY = "identity"
    ALTERNATE = "alternate"


@dataclass(frozen=True)
class IncomingRequest:
    method: Method
    if_none_match: frozenset[str] | set[str] | None = None
    if_unmodified_since: int | None = None
    accepts_alt_encoding: bool = False


@dataclass(frozen=True)
class ResponseDescriptor:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


def evaluate(request: IncomingRequest, resource: ResourceRecord) -> ConditionalOutcome:
    """
    Decide 304 vs 200 a partir de los validadores del cliente.

    If-None-Match tiene prioridad: si viene, decide por sí solo aunque
    también llegue If-Unmodified-Since.
    """
    if request.if_none_match:
        if resource.etag in request.if_none_match:
            return ConditionalOutcome.NOT_MODIFIED
        return ConditionalOutcome.SEND_FULL

    if resource.last_modified_timestamp is not None and request.if_unmodified_since is not None:
        # Modificado después del instante de referencia del cliente
        if resource.last_modified_timestamp > request.if_unmodified_since:
            return ConditionalOutcome.SEND_FULL
        return ConditionalOutcome.NOT_MODIFIED

    return ConditionalOutcome.SEND_FULL


def choose_encoding(request: IncomingRequest, resource: ResourceRecord) -> EncodingChoice:
    # body_alt_encoded sólo existe si gzip reduce tamaño
    if request.accepts_alt_encoding and resource.body_alt_encoded is not None:
        return EncodingChoice.ALTERNATE
    return EncodingChoice.IDENTITY


def assemble(
    outcome: ConditionalOutcome,
    encoding: EncodingChoice,
    resource: ResourceRecord,
) -> ResponseDescriptor:
    if outcome is ConditionalOutcome.NOT_MODIFIED:
        return ResponseDescriptor(status=304)

    headers = {"ETag": f'"{resource.etag}"'}
    if resource.last_modified is not None:
        headers["Last-Modified"] = resource.last_modified
    if resource.mime_type is not None:
        headers["Content-Type"] = resource.mime_type

    if encoding is EncodingChoice.ALTERNATE and resource.body_alt_encoded is not None:
        headers["Content-Encoding"] = ALT_ENCODING
        return ResponseDescriptor(status=200, headers=headers, body=resource.body_alt_encoded)

    return ResponseDescriptor(status=200, headers=headers, body=resource.body)


def method_allowed(request: IncomingRequest) -> bool:
    return request.method is not Method.OTHER


def respond(request: IncomingRequest, resource: ResourceRecord) -> ResponseDescriptor:
    """
    Pipeline completo para un recurso ya resuelto.

    Sólo GET y HEAD: cualquier otro método -> 501 sin cabeceras ni cuerpo.
    El método no se vuelve a consultar; quitar el cuerpo en HEAD es cosa
    de la capa de transporte.
    """
    if not method_allowed(request):
        return ResponseDescriptor(status=501)

    outcome = evaluate(request, resource)
    if outcome is ConditionalOutcome.NOT_MODIFIED:
        return assemble(outcome, EncodingChoice.IDENTITY, resource)
    return assemble(outcome, choose_encoding(request, resource), resource)
