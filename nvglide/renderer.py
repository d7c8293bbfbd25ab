"""Renderer settings and the order in which editor windows are drawn."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from nvglide.animation import Point


@dataclass
class RendererSettings:
    """User-tunable rendering behaviour, mirrored from ``g:neovide_*``."""

    position_animation_length: float = 0.15
    scroll_animation_length: float = 0.3
    floating_opacity: float = 0.7
    floating_blur: bool = True
    floating_blur_amount_x: float = 2.0
    floating_blur_amount_y: float = 2.0
    debug_renderer: bool = False
    profiler: bool = False
    underline_automatic_scaling: bool = False


class DrawableWindow(Protocol):
    """The window state that decides drawing order."""

    id: int
    hidden: bool
    floating_order: Optional[int]
    grid_current_position: Point


def floating_sort_key(window: DrawableWindow) -> tuple[int, float, float]:
    """Sort key of a floating window: its order, then its x and y position."""
    if window.floating_order is None:
        raise ValueError(f"window {window.id} is not floating")
    position = window.grid_current_position
    return (window.floating_order, position.x, position.y)


def order_windows(windows: Iterable[DrawableWindow]) -> list[DrawableWindow]:
    """Visible windows in drawing order.

    Root windows come first, sorted by id; floating windows follow, sorted by
    their floating order and then by position.
    """
    visible = [window for window in windows if not window.hidden]
    root = sorted(
        (window for window in visible if window.floating_order is None),
        key=lambda window: window.id,
    )
    floating = sorted(
        (window for window in visible if window.floating_order is not None),
        key=floating_sort_key,
    )
    return root + floating