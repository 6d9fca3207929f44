import base64
import gzip
import hashlib
import os

import pytest

from webembed.api.caching.resource import (
    ResourceRecord,
    build_record,
    compute_etag,
    gzip_if_smaller,
    http_date,
    record_from_bytes,
)


def test_compute_etag_is_base64_sha256():
    body = b"hello"
    expected = base64.b64encode(hashlib.sha256(body).digest()).decode("ascii")
    assert compute_etag(body) == expected
    assert compute_etag(body) != compute_etag(b"hello!")


def test_http_date():
    assert http_date(784111777) == "Sun, 06 Nov 1994 08:49:37 GMT"


def test_gzip_if_smaller_keeps_compressible_body():
    body = b"abc" * 1000
    out = gzip_if_smaller(body)
    assert out is not None
    assert len(out) < len(body)
    assert gzip.decompress(out) == body


def test_gzip_if_smaller_drops_incompressible_body():
    assert gzip_if_smaller(b"x") is None
    assert gzip_if_smaller(b"") is None


def test_gzip_is_deterministic():
    body = b"abc" * 1000
    assert gzip_if_smaller(body) == gzip_if_smaller(body)


def test_record_from_bytes_without_timestamp():
    record = record_from_bytes(b"tiny")
    assert record.body == b"tiny"
    assert record.body_alt_encoded is None
    assert record.last_modified is None
    assert record.last_modified_timestamp is None


def test_record_from_bytes_with_timestamp():
    record = record_from_bytes(b"tiny", last_modified_timestamp=1000)
    assert record.last_modified_timestamp == 1000
    assert record.last_modified == "Thu, 01 Jan 1970 00:16:40 GMT"


def test_last_modified_pair_must_be_consistent():
    with pytest.raises(ValueError):
        ResourceRecord(body=b"", etag="x", last_modified_timestamp=1000)
    with pytest.raises(ValueError):
        ResourceRecord(body=b"", etag="x", last_modified="Thu, 01 Jan 1970 00:16:40 GMT")


def test_build_record_from_file(tmp_path):
    path = tmp_path / "style.css"
    path.write_text("p { color: red; }\n" * 100, encoding="utf-8")
    os.utime(path, (1000, 1000))

    record = build_record(path, gzip_level=6)

    assert record.body == path.read_bytes()
    assert record.etag == compute_etag(record.body)
    assert record.body_alt_encoded is not None
    assert gzip.decompress(record.body_alt_encoded) == record.body
    assert record.last_modified_timestamp == 1000
    assert record.last_modified == "Thu, 01 Jan 1970 00:16:40 GMT"
    assert record.mime_type == "text/css"


def test_build_record_unknown_extension(tmp_path):
    path = tmp_path / "blob.zzzunknown"
    path.write_bytes(b"\x00\x01")
    assert build_record(path).mime_type == "application/octet-stream"
