from __future__ import annotations

from webembed.api.caching.registry import AssetRegistry
from webembed.api.paths import resolve_dir
from webembed.api.settings import Settings

_SETTINGS = Settings.from_env()
_REGISTRY = AssetRegistry(_SETTINGS, resolve_dir(_SETTINGS.assets_dir_raw))


def get_settings() -> Settings:
    return _SETTINGS


def get_registry() -> AssetRegistry:
    return _REGISTRY
