"""Position, scroll and visibility state of one editor window, with animation."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Optional, Protocol

from nvglide.animation import F32_EPSILON, Point, ease, ease_out_expo, ease_point
from nvglide.profiler import Rect
from nvglide.window_geometry import Dimensions

MAX_SNAPSHOTS = 5

# A t outside the 0..1 range marks an animation as stopped.
_STOPPED = 2.0


class AnimationSettings(Protocol):
    """The renderer settings that window animations read."""

    position_animation_length: float
    scroll_animation_length: float


@dataclass(frozen=True)
class WindowPadding:
    """Padding around the window grid, in pixels."""

    top: int = 0
    left: int = 0
    right: int = 0
    bottom: int = 0


@dataclass(frozen=True)
class _PositionOverride:
    top_line: int
    current_scroll: float


class WindowAnimation:
    """Animated placement and scrolling of a window's grid.

    Positions are in grid cells. ``top_line`` is the buffer line shown at the
    top of the current contents; ``snapshot_top_lines`` holds the top lines of
    earlier contents still visible while a scroll animates.
    """

    def __init__(
        self,
        id: int,
        grid_position: Point,
        grid_size: Dimensions,
        padding: WindowPadding = WindowPadding(),
    ) -> None:
        self.id = id
        self.hidden = False
        self.floating_order: Optional[int] = None
        self.grid_size = grid_size
        self.padding = padding

        self.grid_start_position = grid_position
        self.grid_current_position = grid_position
        self.grid_destination = grid_position
        self.position_t = _STOPPED

        self.start_scroll = 0.0
        self.current_scroll = 0.0
        self.scroll_destination = 0.0
        self.scroll_t = _STOPPED

        self.top_line = 0
        self.snapshot_top_lines: deque[int] = deque(maxlen=MAX_SNAPSHOTS)
        self._position_override: Optional[_PositionOverride] = None

    @property
    def is_floating(self) -> bool:
        return self.floating_order is not None

    def update(self, settings: AnimationSettings, dt: float) -> bool:
        """Advance position and scroll animations; True while either still runs."""
        animating = False

        if 1.0 - self.position_t < F32_EPSILON:
            self.position_t = _STOPPED
        else:
            animating = True
            self.position_t = min(
                self.position_t + dt / settings.position_animation_length, 1.0
            )
        self.grid_current_position = ease_point(
            ease_out_expo, self.grid_start_position, self.grid_destination, self.position_t
        )

        if 1.0 - self.scroll_t < F32_EPSILON:
            self.scroll_t = _STOPPED
            self.snapshot_top_lines.clear()
        else:
            animating = True
            self.scroll_t = min(self.scroll_t + dt / settings.scroll_animation_length, 1.0)
        self.current_scroll = ease(
            ease_out_expo, self.start_scroll, self.scroll_destination, self.scroll_t
        )

        return animating

    def position(
        self,
        grid_position: tuple[float, float],
        grid_size: tuple[int, int],
        floating_order: Optional[int],
        font_dimensions: Dimensions,
    ) -> bool:
        """Move and resize the window; True when its grid size changed."""
        grid_left, grid_top = grid_position
        top_offset = self.padding.top / font_dimensions.height
        left_offset = self.padding.left / font_dimensions.width
        new_destination = Point(
            max(grid_left, 0.0) + left_offset,
            max(grid_top, 0.0) + top_offset,
        )
        new_grid_size = Dimensions(*grid_size)

        if self.grid_destination != new_destination:
            start = self.grid_start_position
            if abs(start.x) > F32_EPSILON or abs(start.y) > F32_EPSILON:
                self.position_t = 0.0
                self.grid_start_position = self.grid_current_position
            else:
                # The window is leaving its initial location; don't animate that.
                self.position_t = _STOPPED
                self.grid_start_position = new_destination
            self.grid_destination = new_destination

        resized = self.grid_size != new_grid_size
        self.grid_size = new_grid_size
        self.floating_order = floating_order

        if self.hidden:
            self.hidden = False
            self.position_t = _STOPPED
            self.grid_start_position = new_destination
            self.grid_destination = new_destination

        return resized

    def show(self) -> None:
        """Make a hidden window visible without animating it into place."""
        if self.hidden:
            self.hidden = False
            self.position_t = _STOPPED
            self.grid_start_position = self.grid_destination

    def hide(self) -> None:
        self.hidden = True

    def clear(self) -> None:
        """Drop the contents kept for scroll animation."""
        self.snapshot_top_lines.clear()

    def draw_line(self) -> None:
        """Note that new content was drawn, so the scroll override no longer applies."""
        self._position_override = None

    def viewport(self, top_line: float) -> bool:
        """Scroll to ``top_line``; True when a new scroll animation started."""
        new_top_line = int(max(top_line, 0.0))
        if new_top_line == self.top_line:
            return False

        self.snapshot_top_lines.append(self.top_line)
        if self._position_override is None:
            self._position_override = _PositionOverride(self.top_line, self.current_scroll)

        self.top_line = new_top_line
        self.start_scroll = self.current_scroll
        self.scroll_destination = float(top_line)
        self.scroll_t = 0.0
        return True

    def pixel_region(self, font_dimensions: Dimensions) -> Rect:
        """The window's area on screen, in pixels."""
        left = self.grid_current_position.x * font_dimensions.width
        top = self.grid_current_position.y * font_dimensions.height
        width = self.grid_size.width * font_dimensions.width
        height = self.grid_size.height * font_dimensions.height
        return Rect(left, top, left + width, top + height)

    def scroll_offset(self, font_height: int) -> float:
        """Vertical pixel offset at which the current contents are drawn."""
        if self._position_override is not None:
            top_line = self._position_override.top_line
            current_scroll = self._position_override.current_scroll
        else:
            top_line = self.top_line
            current_scroll = self.current_scroll
        return float(top_line * font_height) - current_scroll * font_height

    def snapshot_offsets(self, font_height: int) -> list[float]:
        """Pixel offsets of the earlier contents, newest first, as they are drawn."""
        return [
            float(line * font_height) - self.current_scroll * font_height
            for line in reversed(self.snapshot_top_lines)
        ]