"""Persistence and parsing of the editor window's size and position."""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

SETTINGS_FILE = "neovide-settings.json"
_U64_MAX = 2**64 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_DIMENSION_RE = re.compile(r"\+?[0-9]+")


class WindowSettingsError(Exception):
    """Raised when stored window settings cannot be read."""


@dataclass(frozen=True)
class Dimensions:
    """A width and height, in grid cells."""

    width: int = 0
    height: int = 0


DEFAULT_WINDOW_GEOMETRY = Dimensions(width=100, height=50)


@dataclass(frozen=True)
class Maximized:
    """The window was maximized."""


@dataclass(frozen=True)
class Windowed:
    """The window was a normal window with a position and grid size."""

    position: tuple[int, int] = (0, 0)
    size: Dimensions = Dimensions()


PersistentWindowSettings = Union[Maximized, Windowed]


def _neovim_data_dir() -> Path:
    if sys.platform == "win32":
        return Path.home() / "AppData" / "local" / "nvim-data"
    xdg_data_home = os.environ.get("XDG_DATA_HOME", "")
    base = Path(xdg_data_home) if os.path.isabs(xdg_data_home) else Path.home() / ".local" / "share"
    return base / "nvim"


def settings_path() -> Path:
    """Location of the persisted window settings file."""
    return _neovim_data_dir() / SETTINGS_FILE


def _require_int(value: Any, low: int, high: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise WindowSettingsError(f"invalid {what}: {value!r}")
    return value


def _require_object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise WindowSettingsError(f"expected an object for {what}, found {value!r}")
    return value


def _decode_dimensions(data: Any) -> Dimensions:
    obj = _require_object(data, "size")
    try:
        width, height = obj["width"], obj["height"]
    except KeyError as exc:
        raise WindowSettingsError(f"missing field {exc.args[0]}") from None
    return Dimensions(
        _require_int(width, 0, _U64_MAX, "width"),
        _require_int(height, 0, _U64_MAX, "height"),
    )


def _decode_position(data: Any) -> tuple[int, int]:
    obj = _require_object(data, "position")
    try:
        x, y = obj["x"], obj["y"]
    except KeyError as exc:
        raise WindowSettingsError(f"missing field {exc.args[0]}") from None
    return (
        _require_int(x, _I32_MIN, _I32_MAX, "x"),
        _require_int(y, _I32_MIN, _I32_MAX, "y"),
    )


def _decode_window(data: Any) -> PersistentWindowSettings:
    if data == "Maximized":
        return Maximized()
    if isinstance(data, dict) and len(data) == 1:
        (tag, body), = data.items()
        if tag == "Maximized" and body is None:
            return Maximized()
        if tag == "Windowed":
            obj = _require_object(body, "Windowed")
            position = _decode_position(obj["position"]) if "position" in obj else (0, 0)
            size = _decode_dimensions(obj["size"]) if "size" in obj else Dimensions()
            return Windowed(position=position, size=size)
    raise WindowSettingsError(f"unknown window settings: {data!r}")


def _encode_window(window: PersistentWindowSettings) -> Any:
    if isinstance(window, Maximized):
        return "Maximized"
    x, y = window.position
    return {
        "Windowed": {
            "position": {"x": x, "y": y},
            "size": {"width": window.size.width, "height": window.size.height},
        }
    }


def load_last_window_settings(path: Optional[Path] = None) -> PersistentWindowSettings:
    """Read the stored window settings, substituting the default for a zero size."""
    path = Path(path) if path is not None else settings_path()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WindowSettingsError(str(exc)) from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise WindowSettingsError(str(exc)) from exc
    document = _require_object(document, "settings")
    if "window" not in document:
        raise WindowSettingsError("missing field window")
    window = _decode_window(document["window"])
    logger.debug("Loaded window settings: %r", window)

    if isinstance(window, Windowed) and (window.size.width == 0 or window.size.height == 0):
        window = Windowed(position=window.position, size=DEFAULT_WINDOW_GEOMETRY)
    return window


def last_window_geometry(path: Optional[Path] = None) -> Dimensions:
    """The last windowed grid size, or the default when unavailable or maximized."""
    try:
        window = load_last_window_settings(path)
    except WindowSettingsError:
        return DEFAULT_WINDOW_GEOMETRY
    if isinstance(window, Windowed):
        return window.size
    return DEFAULT_WINDOW_GEOMETRY


def save_window_geometry(
    maximized: bool,
    grid_size: Optional[Dimensions],
    position: Optional[tuple[int, int]],
    remember_window_size: bool,
    remember_window_position: bool,
    path: Optional[Path] = None,
) -> None:
    """Write the window state, honouring which parts should be remembered."""
    if maximized and remember_window_size:
        window: PersistentWindowSettings = Maximized()
    else:
        size = grid_size if remember_window_size and grid_size is not None else DEFAULT_WINDOW_GEOMETRY
        pos = position if remember_window_position and position is not None else (0, 0)
        window = Windowed(position=tuple(pos), size=size)

    path = Path(path) if path is not None else settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps({"window": _encode_window(window)}, separators=(",", ":"))
    logger.debug("Saved Window Settings: %s", text)
    path.write_text(text, encoding="utf-8")


def parse_window_geometry(text: str) -> Dimensions:
    """Parse a '<width>x<height>' string into grid dimensions."""
    invalid = f"Invalid geometry: {text}\nValid format: <width>x<height>"
    dimensions = []
    for part in text.split("x"):
        if not _DIMENSION_RE.fullmatch(part) or int(part) > _U64_MAX:
            raise ValueError(invalid)
        value = int(part)
        if value <= 0:
            raise ValueError("Invalid geometry: Window dimensions should be greater than 0.")
        dimensions.append(value)
    if len(dimensions) != 2:
        raise ValueError(invalid)
    width, height = dimensions
    return Dimensions(width=width, height=height)