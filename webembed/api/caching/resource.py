# ResourceRecord + construcción (sha256/base64 ETag, gzip sólo si reduce tamaño)
from __future__ import annotations

import base64
import gzip
import hashlib
import mimetypes
from dataclasses import dataclass
from email.utils import formatdate
from pathlib import Path

_DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class ResourceRecord:
    """
    Recurso servible, inmutable mientras dure el proceso (o hasta un refresh).

    - etag: sin comillas; se entrecomilla al emitir la cabecera.
    - body_alt_encoded: gzip de body, sólo si es estrictamente más pequeño.
    - last_modified / last_modified_timestamp: ambos presentes o ambos None.
    """

    body: bytes
    etag: str
    body_alt_encoded: bytes | None = None
    last_modified: str | None = None
    last_modified_timestamp: int | None = None
    mime_type: str | None = None

    def __post_init__(self) -> None:
        if (self.last_modified is None) != (self.last_modified_timestamp is None):
            raise ValueError("last_modified and last_modified_timestamp must be set together")


def compute_etag(body: bytes) -> str:
    digest = hashlib.sha256(body).digest()
    return base64.b64encode(digest).decode("ascii")


def http_date(timestamp: int) -> str:
    return formatdate(timestamp, usegmt=True)


def gzip_if_smaller(body: bytes, *, level: int = 9) -> bytes | None:
    # mtime=0 -> salida determinista para el mismo contenido
    compressed = gzip.compress(body, compresslevel=level, mtime=0)
    if len(compressed) < len(body):
        return compressed
    return None


def guess_mime_type(name: str) -> str:
    mime, _ = mimetypes.guess_type(name)
    return mime or _DEFAULT_MIME_TYPE


def record_from_bytes(
    body: bytes,
    *,
    last_modified_timestamp: int | None = None,
    gzip_level: int = 9,
    mime_type: str | None = None,
) -> ResourceRecord:
    last_modified = None
    if last_modified_timestamp is not None:
        last_modified = http_date(last_modified_timestamp)

    return ResourceRecord(
        body=body,
        etag=compute_etag(body),
        body_alt_encoded=gzip_if_smaller(body, level=gzip_level),
        last_modified=last_modified,
        last_modified_timestamp=last_modified_timestamp,
        mime_type=mime_type,
    )


def build_record(path: Path, *, gzip_level: int = 9) -> ResourceRecord:
    body = path.read_bytes()
    return record_from_bytes(
        body,
        last_modified_timestamp=int(path.stat().st_mtime),
        gzip_level=gzip_level,
        mime_type=guess_mime_type(path.name),
    )
