"""Cursor visual effects: expanding highlights and particle trails."""

from __future__ import annotations

import enum
import logging
import math
import struct
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Union

from nvglide.animation import F32_EPSILON, Point

logger = logging.getLogger(__name__)

_U64_MASK = 0xFFFF_FFFF_FFFF_FFFF
_U32_MASK = 0xFFFF_FFFF
_PCG_MULTIPLIER = 6_364_136_223_846_793_005


class VfxSettings(Protocol):
    """The cursor settings that the effects read."""

    vfx_opacity: float
    vfx_particle_lifetime: float
    vfx_particle_density: float
    vfx_particle_speed: float
    vfx_particle_phase: float
    vfx_particle_curl: float


class VfxMode(enum.Enum):
    """The cursor effect to show; the value is the setting's string form."""

    SONIC_BOOM = "sonicboom"
    RIPPLE = "ripple"
    WIREFRAME = "wireframe"
    RAILGUN = "railgun"
    TORPEDO = "torpedo"
    PIXIE_DUST = "pixiedust"
    DISABLED = ""

    @property
    def is_highlight(self) -> bool:
        return self in (VfxMode.SONIC_BOOM, VfxMode.RIPPLE, VfxMode.WIREFRAME)

    @property
    def is_trail(self) -> bool:
        return self in (VfxMode.RAILGUN, VfxMode.TORPEDO, VfxMode.PIXIE_DUST)


def parse_vfx_mode(current: VfxMode, value: Any) -> VfxMode:
    """Parse a mode name; on anything unrecognised log an error and keep ``current``."""
    if not isinstance(value, str):
        logger.error("Expected a VfxMode string, but received %r", value)
        return current
    try:
        return VfxMode(value)
    except ValueError:
        logger.error("Expected a VfxMode name, but received %r", value)
        return current


class PointHighlight:
    """A shape that grows out from the cursor and fades away."""

    def __init__(self, mode: VfxMode) -> None:
        if not mode.is_highlight:
            raise ValueError(f"{mode!r} is not a highlight mode")
        self.t = 0.0
        self.center_position = Point(0.0, 0.0)
        self.mode = mode

    def update(
        self,
        settings: VfxSettings,
        current_cursor_destination: Point,
        cursor_dimensions: Point,
        dt: float,
    ) -> bool:
        """Advance the animation; True while it is still running."""
        self.t = min(self.t + dt * 5.0, 1.0)
        return self.t < 1.0

    def restart(self, position: Point) -> None:
        """Start the effect again centred on ``position``."""
        self.t = 0.0
        self.center_position = position

    @property
    def finished(self) -> bool:
        return abs(self.t - 1.0) < F32_EPSILON


@dataclass
class Particle:
    """One particle of a trail."""

    pos: Point
    speed: Point
    rotation_speed: float
    lifetime: float


def _to_f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


class PcgRng:
    """A small deterministic PCG-XSH-RR random number generator."""

    def __init__(self) -> None:
        self.state = 0x853C_49E6_748F_EA9B
        self.inc = ((0xDA3E_39CB_94B9_5BDB << 1) | 1) & _U64_MASK

    def next_u32(self) -> int:
        """Next 32-bit random value."""
        old_state = self.state
        self.state = (old_state * _PCG_MULTIPLIER + self.inc) & _U64_MASK
        rot = old_state >> 59
        xsh = (((old_state >> 18) ^ old_state) >> 27) & _U32_MASK
        return ((xsh >> rot) | (xsh << ((32 - rot) % 32))) & _U32_MASK

    def next_f32(self) -> float:
        """Random single-precision value in the range [0, 1]."""
        return _to_f32(math.ldexp(self.next_u32(), -32))

    def rand_dir(self) -> Point:
        """Random vector with both coordinates in [-1, 1); not normalized."""
        x = self.next_f32()
        y = self.next_f32()
        return Point(x * 2.0 - 1.0, y * 2.0 - 1.0)

    def rand_dir_normalized(self) -> Point:
        return self.rand_dir().normalized()


def rotate_vec(v: Point, rot: float) -> Point:
    """Rotate ``v`` by ``rot`` radians."""
    sin = math.sin(rot)
    cos = math.cos(rot)
    return Point(v.x * cos - v.y * sin, v.x * sin + v.y * cos)


@dataclass
class ParticleTrail:
    """Particles left behind as the cursor travels."""

    trail_mode: VfxMode
    particles: list[Particle] = field(default_factory=list)
    previous_cursor_dest: Point = Point(0.0, 0.0)
    rng: PcgRng = field(default_factory=PcgRng)

    def __post_init__(self) -> None:
        if not self.trail_mode.is_trail:
            raise ValueError(f"{self.trail_mode!r} is not a trail mode")

    def update(
        self,
        settings: VfxSettings,
        current_cursor_destination: Point,
        cursor_dimensions: Point,
        dt: float,
    ) -> bool:
        """Age, move and spawn particles; True while any particle is alive."""
        for particle in self.particles:
            particle.lifetime -= dt
        self.particles = [p for p in self.particles if p.lifetime > 0.0]

        for particle in self.particles:
            particle.pos = particle.pos + particle.speed * dt
            particle.speed = rotate_vec(particle.speed, dt * particle.rotation_speed)

        if current_cursor_destination != self.previous_cursor_dest:
            self._spawn(settings, current_cursor_destination, cursor_dimensions)
            self.previous_cursor_dest = current_cursor_destination

        return bool(self.particles)

    def _spawn(self, settings: VfxSettings, destination: Point, cursor_dimensions: Point) -> None:
        travel = destination - self.previous_cursor_dest
        travel_distance = travel.length()
        cell_height = cursor_dimensions.y
        if cell_height == 0:
            return
        relative_distance = travel_distance / cell_height

        raw_count = relative_distance**1.5 * settings.vfx_particle_density * 0.01
        particle_count = int(raw_count) if math.isfinite(raw_count) and raw_count > 0 else 0
        prev = self.previous_cursor_dest
        mode = self.trail_mode

        for i in range(particle_count):
            t = i / particle_count

            if mode is VfxMode.RAILGUN:
                phase = t / math.pi * settings.vfx_particle_phase * relative_distance
                speed = Point(math.sin(phase), math.cos(phase)) * 2.0 * settings.vfx_particle_speed
            elif mode is VfxMode.TORPEDO:
                travel_dir = travel.normalized()
                particle_dir = (self.rng.rand_dir_normalized() - travel_dir * 1.5).normalized()
                speed = particle_dir * settings.vfx_particle_speed
            else:
                base_dir = self.rng.rand_dir_normalized()
                direction = Point(base_dir.x * 0.5, 0.4 + abs(base_dir.y))
                speed = direction * 3.0 * settings.vfx_particle_speed

            if mode is VfxMode.RAILGUN:
                pos = prev + travel * t
            else:
                pos = prev + travel * self.rng.next_f32() + Point(0.0, cell_height * 0.5)

            if mode is VfxMode.RAILGUN:
                rotation_speed = math.pi * settings.vfx_particle_curl
            else:
                rotation_speed = (
                    (self.rng.next_f32() - 0.5) * (math.pi / 2.0) * settings.vfx_particle_curl
                )

            self.particles.append(
                Particle(pos, speed, rotation_speed, t * settings.vfx_particle_lifetime)
            )

    def restart(self, position: Point) -> None:
        """Trails do not restart; they follow the cursor continuously."""


CursorVfx = Union[PointHighlight, ParticleTrail]


def new_cursor_vfx(mode: VfxMode) -> Optional[CursorVfx]:
    """Create the effect for ``mode``, or None when effects are disabled."""
    if mode.is_highlight:
        return PointHighlight(mode)
    if mode.is_trail:
        return ParticleTrail(mode)
    return None