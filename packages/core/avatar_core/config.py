"""Avatar render settings, chained builder helpers, and load/save of persisted defaults."""

from __future__ import annotations

import json
import math
import os
import platform
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from .errors import ConfigError


CONFIG_VERSION = 2

DEFAULT_FONT_PATH = "Roboto-Bold.ttf"
DEFAULT_FONT_SIZE = 210.0
DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 500
DEFAULT_DPI = 72
DEFAULT_SPACER = 20
DEFAULT_TEXT_Y = 320

# v1 files were written with the struct field names of the first release.
_V1_KEYS = {
    "FontPath": "font_path",
    "FontSize": "font_size",
    "Width": "width",
    "Height": "height",
    "Dpi": "dpi",
    "Spacer": "spacer",
    "TextX": "text_x",
    "TextY": "text_y",
    "FontColor": "font_color",
    "BackColor": "back_color",
}


@dataclass(frozen=True)
class AvatarConfig:
    font_path: str = DEFAULT_FONT_PATH
    font_size: float = DEFAULT_FONT_SIZE
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    dpi: int = DEFAULT_DPI
    spacer: int = DEFAULT_SPACER
    text_x: int = 0
    text_y: int = DEFAULT_TEXT_Y
    font_color: str = ""
    back_color: str = ""

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"canvas must be positive, got {self.width}x{self.height}")
        if not math.isfinite(self.font_size) or self.font_size <= 0:
            raise ConfigError(f"font size must be positive and finite, got {self.font_size}")
        if self.dpi <= 0:
            raise ConfigError(f"dpi must be positive, got {self.dpi}")
        if self.spacer < 0:
            raise ConfigError(f"spacer must not be negative, got {self.spacer}")

    def configure_font(self, path: str, size: float) -> AvatarConfig:
        return replace(self, font_path=path, font_size=size)

    def configure_size(self, width: int, height: int) -> AvatarConfig:
        return replace(self, width=width, height=height)

    def configure_color(self, font_color: str, back_color: str) -> AvatarConfig:
        return replace(self, font_color=font_color, back_color=back_color)

    def configure_position(self, x: int, y: int) -> AvatarConfig:
        return replace(self, text_x=x, text_y=y)

    def configure_dpi(self, dpi: int) -> AvatarConfig:
        return replace(self, dpi=dpi)

    def configure_spacer(self, spacer: int) -> AvatarConfig:
        return replace(self, spacer=spacer)


DEFAULT_CONFIG = AvatarConfig()


def config_path() -> Path:
    override = os.environ.get("AVATAR_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "InitialsAvatar" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "InitialsAvatar" / "config.json"
    return Path.home() / ".config" / "initials-avatar" / "config.json"


def _merge(raw: dict[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(AvatarConfig)}
    values = asdict(DEFAULT_CONFIG)
    for k, v in raw.items():
        if k in known and v is not None:
            values[k] = v
    return values


def _normalize(values: dict[str, Any]) -> dict[str, Any]:
    out = dict(values)
    out["font_path"] = str(out["font_path"]) or DEFAULT_FONT_PATH
    out["width"] = max(1, int(out["width"]))
    out["height"] = max(1, int(out["height"]))
    out["dpi"] = max(1, int(out["dpi"]))
    out["spacer"] = max(0, int(out["spacer"]))
    out["text_x"] = int(out["text_x"])
    out["text_y"] = int(out["text_y"])
    size = float(out["font_size"])
    out["font_size"] = size if math.isfinite(size) and size > 0 else DEFAULT_FONT_SIZE
    out["font_color"] = str(out["font_color"] or "")
    out["back_color"] = str(out["back_color"] or "")
    return out


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        for old, new in _V1_KEYS.items():
            if old in data:
                data.setdefault(new, data.pop(old))
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AvatarConfig:
    path = path or config_path()
    if not path.exists():
        return AvatarConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AvatarConfig()
    if not isinstance(raw, dict):
        return AvatarConfig()

    try:
        return AvatarConfig(**_normalize(_merge(_migrate(raw))))
    except (TypeError, ValueError):
        return AvatarConfig()


def save_config(cfg: AvatarConfig, path: Path | None = None) -> Path:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"config_version": CONFIG_VERSION, **asdict(cfg)}
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    return path
