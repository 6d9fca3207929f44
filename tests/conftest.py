from __future__ import annotations

from pathlib import Path

import pytest

from webembed.api.settings import Settings


def make_settings(**overrides) -> Settings:
    values = dict(
        log_level="INFO",
        cors_origins_raw="*",
        cors_allow_credentials=False,
        assets_dir_raw="assets",
        gzip_level=9,
        assets_reload_ttl_seconds=0.0,
        file_read_max_attempts=1,
        file_read_retry_sleep_s=0.0,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def assets_dir(tmp_path: Path) -> Path:
    """
    Directorio de assets con:
    - app.js: texto repetitivo (gzip lo reduce).
    - logo.bin: 4 bytes (gzip lo agranda -> sin cuerpo alternativo).
    - css/site.css: subdirectorio.
    - .hidden: ignorado por el registro.
    """
    root = tmp_path / "assets"
    (root / "css").mkdir(parents=True)
    (root / "app.js").write_text("console.log('hello');\n" * 200, encoding="utf-8")
    (root / "logo.bin").write_bytes(b"\x89PNG")
    (root / "css" / "site.css").write_text("body { margin: 0; }\n" * 50, encoding="utf-8")
    (root / ".hidden").write_text("secret", encoding="utf-8")
    return root
