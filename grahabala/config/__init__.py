"""Configuration surface for grahabala."""

from .settings import (
    CURRENT_SETTINGS_SCHEMA_VERSION,
    AspectsCfg,
    Settings,
    ShadbalaCfg,
    config_path,
    default_settings,
    get_config_home,
    load_settings,
    resolve_settings,
    save_settings,
)

__all__ = [
    "AspectsCfg",
    "CURRENT_SETTINGS_SCHEMA_VERSION",
    "Settings",
    "ShadbalaCfg",
    "config_path",
    "default_settings",
    "get_config_home",
    "load_settings",
    "resolve_settings",
    "save_settings",
]
