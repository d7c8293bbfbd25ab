"""Parsing of the ``guifont`` option into font options."""

from __future__ import annotations

import enum
import re
import sys
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_FONT_SIZE = 14.0
_F32_EPSILON = 1.1920929e-07

_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)


class FontEdging(enum.Enum):
    ANTI_ALIAS = "antialias"
    SUBPIXEL_ANTI_ALIAS = "subpixelantialias"
    ALIAS = "alias"

    @classmethod
    def parse(cls, value: str) -> FontEdging:
        """Parse an edging name; anything unknown means aliased."""
        if value == "antialias":
            return cls.ANTI_ALIAS
        if value == "subpixelantialias":
            return cls.SUBPIXEL_ANTI_ALIAS
        return cls.ALIAS


class FontHinting(enum.Enum):
    FULL = "full"
    NORMAL = "normal"
    SLIGHT = "slight"
    NONE = "none"

    @classmethod
    def parse(cls, value: str) -> FontHinting:
        """Parse a hinting name; anything unknown means no hinting."""
        if value in ("full", "normal", "slight"):
            return cls(value)
        return cls.NONE


def points_to_pixels(value: float) -> float:
    """Convert a size in points to pixels (identical on macOS)."""
    if sys.platform == "darwin":
        return value
    pixels_per_inch = 96.0
    points_per_inch = 72.0
    return value * (pixels_per_inch / points_per_inch)


def parse_font_name(font_name: str) -> str:
    """Turn underscores into spaces; a backslash takes the next character literally."""
    chars = iter(font_name)
    result = []
    for ch in chars:
        if ch == "\\":
            escaped = next(chars, None)
            if escaped is None:
                break
            result.append(escaped)
        elif ch == "_":
            result.append(" ")
        else:
            result.append(ch)
    return "".join(result)


@dataclass(eq=False)
class FontOptions:
    """Fonts, size and rendering flags selected by ``guifont``."""

    font_list: list[str] = field(default_factory=list)
    size: float = field(default_factory=lambda: points_to_pixels(DEFAULT_FONT_SIZE))
    bold: bool = False
    italic: bool = False
    allow_float_size: bool = False
    hinting: FontHinting = FontHinting.FULL
    edging: FontEdging = FontEdging.ANTI_ALIAS

    @classmethod
    def parse(cls, guifont_setting: str) -> FontOptions:
        """Parse ``name[,fallback...][:option...]``."""
        font_list: list[str] = []
        size = DEFAULT_FONT_SIZE
        bold = False
        italic = False
        allow_float_size = False
        hinting = FontHinting.FULL
        edging = FontEdging.ANTI_ALIAS

        parts = [part for part in guifont_setting.split(":") if part]
        if parts:
            parsed = [parse_font_name(name) for name in parts[0].split(",") if name]
            if parsed:
                font_list = parsed

        for part in parts[1:]:
            if part.startswith("#h-"):
                hinting = FontHinting.parse(part[3:])
            elif part.startswith("#e-"):
                edging = FontEdging.parse(part[3:])
            elif part.startswith("h") and len(part) > 1:
                if "." in part:
                    allow_float_size = True
                if _FLOAT_RE.fullmatch(part[1:]):
                    size = float(part[1:])
            elif part == "b":
                bold = True
            elif part == "i":
                italic = True

        return cls(
            font_list=font_list,
            size=points_to_pixels(size),
            bold=bold,
            italic=italic,
            allow_float_size=allow_float_size,
            hinting=hinting,
            edging=edging,
        )

    def primary_font(self) -> Optional[str]:
        """The first configured font, if any."""
        return self.font_list[0] if self.font_list else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FontOptions):
            return NotImplemented
        return (
            self.font_list == other.font_list
            and abs(self.size - other.size) < _F32_EPSILON
            and self.bold == other.bold
            and self.italic == other.italic
            and self.edging == other.edging
            and self.hinting == other.hinting
        )

    __hash__ = None  # type: ignore[assignment]