#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, cast
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from platformdirs import user_config_dir

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config/default.toml"
CONFIG_ENV = "RECEIPTKIT_CONFIG"
USER_CONFIG_NAME = "config.toml"

ImageFormat = Literal["jpeg", "png"]


@dataclass(frozen=True)
class RenderConfig:
    image_format: ImageFormat = "jpeg"
    jpeg_quality: int = 90
    background: str = "#ffffff"
    strict_layout: bool = False
    timezone: str = "America/Bogota"


@dataclass(frozen=True)
class CacheConfig:
    ttl_seconds: float = 43200.0
    capacity: int = 1000
    sweep_interval_seconds: float = 3600.0
    fetch_timeout_seconds: float = 10.0


@dataclass(frozen=True)
class AssetsConfig:
    powered_by_logo: str | None = None


@dataclass(frozen=True)
class FontsConfig:
    directory: Path | None = None


@dataclass(frozen=True)
class StorageConfig:
    bucket: str | None = None
    region: str | None = None
    public_base_url: str | None = None


@dataclass(frozen=True)
class AppConfig:
    render: RenderConfig = field(default_factory=RenderConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    assets: AssetsConfig = field(default_factory=AssetsConfig)
    fonts: FontsConfig = field(default_factory=FontsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    source: Path | None = None


def user_config_path() -> Path:
    return Path(user_config_dir("receiptkit", appauthor=False)) / USER_CONFIG_NAME


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Pick the config file: explicit path, then $RECEIPTKIT_CONFIG, then user, then packaged."""
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()
    user_path = user_config_path()
    if user_path.is_file():
        return user_path
    return DEFAULT_CONFIG_PATH


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return AppConfig(
        render=_parse_render(_get_dict(data, "render")),
        cache=_parse_cache(_get_dict(data, "cache")),
        assets=AssetsConfig(
            powered_by_logo=_parse_optional_str(
                _get_dict(data, "assets").get("powered_by_logo"), field="assets.powered_by_logo"
            ),
        ),
        fonts=_parse_fonts(_get_dict(data, "fonts"), base=config_path.parent),
        storage=_parse_storage(_get_dict(data, "storage")),
        source=config_path,
    )


def _parse_render(cfg: dict[str, object]) -> RenderConfig:
    defaults = RenderConfig()
    image_format = _parse_optional_str(cfg.get("image_format"), field="render.image_format")
    if image_format is None:
        image_format = defaults.image_format
    image_format = image_format.lower()
    if image_format == "jpg":
        image_format = "jpeg"
    if image_format not in {"jpeg", "png"}:
        raise ValueError("render.image_format must be 'jpeg' or 'png'")
    quality = _parse_int(cfg.get("jpeg_quality"), field="render.jpeg_quality", default=90)
    if not 1 <= quality <= 100:
        raise ValueError("render.jpeg_quality must be between 1 and 100")
    timezone = (
        _parse_optional_str(cfg.get("timezone"), field="render.timezone") or defaults.timezone
    )
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"render.timezone: unknown time zone {timezone!r}") from exc
    return RenderConfig(
        image_format=cast(ImageFormat, image_format),
        jpeg_quality=quality,
        background=(
            _parse_optional_str(cfg.get("background"), field="render.background")
            or defaults.background
        ),
        strict_layout=_parse_bool(
            cfg.get("strict_layout"), field="render.strict_layout", default=False
        ),
        timezone=timezone,
    )


def _parse_cache(cfg: dict[str, object]) -> CacheConfig:
    defaults = CacheConfig()
    return CacheConfig(
        ttl_seconds=_parse_positive_float(
            cfg.get("ttl_seconds"), field="cache.ttl_seconds", default=defaults.ttl_seconds
        ),
        capacity=_parse_positive_int(
            cfg.get("capacity"), field="cache.capacity", default=defaults.capacity
        ),
        sweep_interval_seconds=_parse_positive_float(
            cfg.get("sweep_interval_seconds"),
            field="cache.sweep_interval_seconds",
            default=defaults.sweep_interval_seconds,
        ),
        fetch_timeout_seconds=_parse_positive_float(
            cfg.get("fetch_timeout_seconds"),
            field="cache.fetch_timeout_seconds",
            default=defaults.fetch_timeout_seconds,
        ),
    )


def _parse_fonts(cfg: dict[str, object], *, base: Path) -> FontsConfig:
    directory = _parse_optional_str(cfg.get("directory"), field="fonts.directory")
    if directory is None:
        return FontsConfig()
    path = Path(directory).expanduser()
    if not path.is_absolute():
        path = base / path
    return FontsConfig(directory=path)


def _parse_storage(cfg: dict[str, object]) -> StorageConfig:
    return StorageConfig(
        bucket=_parse_optional_str(cfg.get("bucket"), field="storage.bucket"),
        region=_parse_optional_str(cfg.get("region"), field="storage.region"),
        public_base_url=_parse_optional_str(
            cfg.get("public_base_url"), field="storage.public_base_url"
        ),
    )


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{field} must be a boolean")


def _parse_int(value: object, *, field: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer")
    return value


def _parse_positive_int(value: object, *, field: str, default: int) -> int:
    parsed = _parse_int(value, field=field, default=default)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive integer")
    return parsed


def _parse_positive_float(value: object, *, field: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field} must be a number")
    if value <= 0:
        raise ValueError(f"{field} must be positive")
    return float(value)


__all__ = [
    "AppConfig",
    "AssetsConfig",
    "CONFIG_ENV",
    "CacheConfig",
    "DEFAULT_CONFIG_PATH",
    "FontsConfig",
    "RenderConfig",
    "StorageConfig",
    "load_app_config",
    "resolve_config_path",
    "user_config_path",
]
