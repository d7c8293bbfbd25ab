"""Frame-time statistics and graph layout for the on-screen profiler overlay."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from nvglide.animation import F32_EPSILON, Point, lerp

FRAMETIMES_COUNT = 48
GRAPH_HEIGHT = 80.0
BOTTOM_MARGIN = 8.0


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float


@dataclass(frozen=True)
class FrameStats:
    """Minimum, maximum and average frame time in milliseconds."""

    min_ms: float
    max_ms: float
    avg_ms: float

    def labels(self) -> tuple[str, str, str]:
        return (
            f"min: {self.min_ms:.1f}ms",
            f"avg: {self.avg_ms:.1f}ms",
            f"max: {self.max_ms:.1f}ms",
        )


@dataclass
class Profiler:
    """Keeps the most recent frame times and lays out the overlay graph."""

    font_size: float = 12.0
    position: Point = Point(32.0, 32.0)
    width: float = 200.0
    height: float = 120.0
    frametimes: deque = field(default_factory=lambda: deque(maxlen=FRAMETIMES_COUNT))

    @property
    def rect(self) -> Rect:
        return Rect(
            self.position.x,
            self.position.y,
            self.position.x + self.width,
            self.position.y + self.height,
        )

    def text_position(self) -> Point:
        """Baseline of the FPS text."""
        return Point(self.position.x, self.position.y + self.font_size)

    def record(self, dt: float) -> float:
        """Record a frame of ``dt`` seconds and return the frames per second."""
        self.frametimes.append(dt * 1000.0)
        return 1.0 / max(dt, F32_EPSILON)

    @staticmethod
    def fps_label(fps: float) -> str:
        return f"{fps:.0f}FPS"

    def stats(self) -> Optional[FrameStats]:
        """Statistics over the recorded frames, or None before any frame."""
        if not self.frametimes:
            return None
        times = list(self.frametimes)
        return FrameStats(min(times), max(times), sum(times) / len(times))

    def graph_points(self) -> list[Point]:
        """Polyline of the frame-time graph, starting from its anchor point."""
        stats = self.stats()
        if stats is None:
            return []
        rect = self.rect
        bottom = rect.bottom - BOTTOM_MARGIN
        min_g = stats.min_ms * 0.8
        max_g = stats.max_ms * 1.1
        diff = max_g - min_g

        points = [Point(rect.left - 10.0, self.position.y + bottom)]
        count = len(self.frametimes)
        for index, frame_ms in enumerate(self.frametimes):
            x = lerp(rect.left, rect.right, index / count)
            offset = GRAPH_HEIGHT * (frame_ms - min_g) / diff if diff != 0.0 else 0.0
            points.append(Point(x, bottom - offset))
        return points

    def label_positions(self) -> tuple[Point, Point, Point]:
        """Where the min, avg and max labels are drawn."""
        rect = self.rect
        bottom = rect.bottom - BOTTOM_MARGIN
        return (
            Point(rect.left, bottom),
            Point(rect.left, bottom - GRAPH_HEIGHT * 0.5),
            Point(rect.left, bottom - GRAPH_HEIGHT),
        )