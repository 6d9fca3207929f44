# BASE_DIR + resolución del directorio de assets
from __future__ import annotations

from pathlib import Path


# webembed/api/paths.py -> repo_root = parents[2] (webembed/api/*)
BASE_DIR = Path(__file__).resolve().parents[2]


def resolve_dir(raw: str, *, base: Path = BASE_DIR) -> Path:
    value = (raw or "").strip().strip('"').strip("'")
    p = Path(value).expanduser()
    if not p.is_absolute():
        p = (base / p).resolve()
    return p
