"""Cursor shape, settings and the animated corners that make up the cursor."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, replace
from typing import Optional, Protocol, Sequence

from nvglide.animation import F32_EPSILON, Point, ease_out_expo, ease_point, lerp
from nvglide.cursor_vfx import VfxMode

DEFAULT_CELL_PERCENTAGE = 1.0 / 8.0

STANDARD_CORNERS: tuple[tuple[float, float], ...] = (
    (-0.5, -0.5),
    (0.5, -0.5),
    (0.5, 0.5),
    (-0.5, 0.5),
)

SETTING_PREFIX = "cursor"


class CursorShape(enum.Enum):
    BLOCK = "block"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass
class CursorSettings:
    """User-tunable cursor behaviour, mirrored from ``g:neovide_cursor_*``.

    ``unfocused_outline_width`` is in ems; at or below zero the outline of an
    unfocused block cursor becomes invisible.
    """

    antialiasing: bool = True
    animation_length: float = 0.06
    distance_length_adjust: bool = True
    animate_in_insert_mode: bool = True
    animate_command_line: bool = True
    trail_size: float = 0.7
    unfocused_outline_width: float = 1.0 / 8.0
    vfx_mode: VfxMode = VfxMode.DISABLED
    vfx_opacity: float = 200.0
    vfx_particle_lifetime: float = 1.2
    vfx_particle_density: float = 7.0
    vfx_particle_speed: float = 10.0
    vfx_particle_phase: float = 1.5
    vfx_particle_curl: float = 1.0


@dataclass
class Corner:
    """One corner of the cursor, animating towards its place around a destination."""

    start_position: Point = Point(0.0, 0.0)
    current_position: Point = Point(0.0, 0.0)
    relative_position: Point = Point(0.0, 0.0)
    previous_destination: Point = Point(-1000.0, -1000.0)
    length_multiplier: float = 1.0
    t: float = 0.0

    def update(
        self,
        settings: CursorSettings,
        font_dimensions: Point,
        destination: Point,
        dt: float,
        immediate_movement: bool,
    ) -> bool:
        """Move towards ``destination``; True while the corner is still moving."""
        if destination != self.previous_destination:
            self.t = 0.0
            self.start_position = self.current_position
            self.previous_destination = destination
            if settings.distance_length_adjust:
                distance = (destination - self.current_position).length()
                self.length_multiplier = max(math.log10(distance), 0.0) if distance > 0.0 else 0.0
            else:
                self.length_multiplier = 1.0

        if abs(self.t - 1.0) < F32_EPSILON:
            return False

        relative_scaled = Point(
            self.relative_position.x * font_dimensions.x,
            self.relative_position.y * font_dimensions.y,
        )
        corner_destination = destination + relative_scaled

        if immediate_movement:
            self.t = 1.0
            self.current_position = corner_destination
            return True

        # Corners leading the motion move faster than those trailing behind.
        travel_direction = (destination - self.current_position).normalized()
        corner_direction = self.relative_position.normalized()
        direction_alignment = travel_direction.dot(corner_direction)

        corner_dt = dt * lerp(
            1.0,
            min(max(1.0 - settings.trail_size, 0.0), 1.0),
            -direction_alignment,
        )
        duration = settings.animation_length * self.length_multiplier
        if duration == 0.0:
            self.t = 1.0
        else:
            self.t = min(self.t + corner_dt / duration, 1.0)

        self.current_position = ease_point(
            ease_out_expo, self.start_position, corner_destination, self.t
        )
        return True


def corners_for_shape(
    corners: Sequence[Corner],
    cursor_shape: CursorShape,
    cell_percentage: float,
) -> list[Corner]:
    """New corners laid out for ``cursor_shape``, restarting from where they are."""
    if len(corners) != len(STANDARD_CORNERS):
        raise ValueError(f"a cursor has {len(STANDARD_CORNERS)} corners, got {len(corners)}")

    reshaped = []
    for corner, (x, y) in zip(corners, STANDARD_CORNERS):
        if cursor_shape is CursorShape.BLOCK:
            relative = Point(x, y)
        elif cursor_shape is CursorShape.VERTICAL:
            # Pull the right edge in to the bar width.
            relative = Point((x + 0.5) * cell_percentage - 0.5, y)
        else:
            # Same as vertical on the flipped y axis, so the bar sits at the bottom.
            relative = Point(x, -((-y + 0.5) * cell_percentage - 0.5))
        reshaped.append(
            replace(
                corner,
                relative_position=relative,
                t=0.0,
                start_position=corner.current_position,
            )
        )
    return reshaped


class _GridSize(Protocol):
    height: int


class CursorWindow(Protocol):
    """The window state the cursor position depends on."""

    grid_current_position: Point
    current_scroll: float
    top_line: int
    grid_size: _GridSize


def cursor_destination(
    grid_position: tuple[int, int],
    font_dimensions: tuple[int, int],
    window: Optional[CursorWindow],
) -> Point:
    """Pixel position of the cursor's top-left corner.

    Inside a window the position follows the window's animated position and
    scroll, clamped vertically to the window's rows.
    """
    cursor_x, cursor_y = grid_position
    font_width, font_height = font_dimensions

    if window is None:
        return Point(float(cursor_x * font_width), float(cursor_y * font_height))

    origin = window.grid_current_position
    grid_x = cursor_x + origin.x
    grid_y = cursor_y + origin.y - (window.current_scroll - window.top_line)
    grid_y = min(max(grid_y, origin.y), origin.y + window.grid_size.height - 1.0)
    return Point(grid_x * font_width, grid_y * font_height)