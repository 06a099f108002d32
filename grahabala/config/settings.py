"""Configuration models and helpers for grahabala settings."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator

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


CURRENT_SETTINGS_SCHEMA_VERSION = 1

_VARGA_CODE = re.compile(r"^D\d+$")

# -------------------- Settings Schema --------------------


class AspectsCfg(BaseModel):
    """Drishti orb configuration shared by Drik Bala and house strength."""

    full_max_orb: float = 30.0
    special_max_orb: float = 15.0
    partial_aspects: bool = False
    partial_max_orb: float = 15.0

    @field_validator("full_max_orb", "special_max_orb", "partial_max_orb", mode="before")
    @classmethod
    def _cap_orbs(cls, value: float) -> float:
        numeric = float(value)
        return max(1.0, min(60.0, numeric))


class ShadbalaCfg(BaseModel):
    """Tunables for the six-fold strength computation."""

    stationary_speed: float = 0.01
    obliquity: float = 23.45
    saptavarga: Tuple[str, ...] = ("D1", "D2", "D3", "D7", "D9", "D12", "D30")
    include_nodes: bool = True

    @field_validator("stationary_speed", mode="before")
    @classmethod
    def _cap_stationary_speed(cls, value: float) -> float:
        numeric = abs(float(value))
        return min(1.0, numeric)

    @field_validator("obliquity", mode="before")
    @classmethod
    def _cap_obliquity(cls, value: float) -> float:
        numeric = float(value)
        return max(22.0, min(24.5, numeric))

    @field_validator("saptavarga", mode="before")
    @classmethod
    def _normalise_saptavarga(cls, value: object) -> Tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        codes = tuple(str(item).strip().upper() for item in value)  # type: ignore[union-attr]
        for code in codes:
            if not _VARGA_CODE.match(code):
                raise ValueError(f"invalid divisional chart code '{code}'")
        return codes


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    aspects: AspectsCfg = Field(default_factory=AspectsCfg)
    shadbala: ShadbalaCfg = Field(default_factory=ShadbalaCfg)


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("GRAHABALA_HOME", str(Path.home() / ".grahabala")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def resolve_settings(settings: Settings | None) -> Settings:
    """Return ``settings`` or the defaults; never reads the disk."""

    return settings if settings is not None else default_settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump(mode="json")
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    """Return a normalised schema version value with sane bounds."""

    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    raw["schema_version"] = max(
        _coerce_schema_version(raw.get("schema_version")),
        CURRENT_SETTINGS_SCHEMA_VERSION,
    )
    return Settings(**raw)
