"""Pooled 2D particle system drawn through the batched 2D renderer."""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence, Tuple

from overengine.render_api import Camera
from overengine.renderer2d import Renderer2D, TexturedQuadProps
from overengine.texture import Texture2D, TextureFlip

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]

_DEPTH_STEP = 0.0001


def _vec(value: Any, size: int) -> tuple:
    values = tuple(float(v) for v in value)
    if len(values) != size:
        raise ValueError(f"expected {size} components, got {len(values)}")
    return values


def _position(value: Any) -> Vec3:
    values = tuple(float(v) for v in value)
    if len(values) == 2:
        return (values[0], values[1], 0.0)
    if len(values) == 3:
        return values  # type: ignore[return-value]
    raise ValueError("position needs two or three components")


def _mix(a: Sequence[float], b: Sequence[float], t: float) -> tuple:
    return tuple(x * (1.0 - t) + y * t for x, y in zip(a, b))


@dataclass
class Particle2DRenderingProps:
    birth_color: Vec4 = (1.0, 1.0, 1.0, 1.0)
    death_color: Vec4 = (0.0, 0.0, 0.0, 0.0)
    sprite: Optional[Texture2D] = None
    tiling: Vec2 = (1.0, 1.0)
    offset: Vec2 = (0.0, 0.0)
    flip: TextureFlip = TextureFlip.NONE


@dataclass
class Particle2DProps:
    """How one emitted particle starts out; life time is in seconds."""

    position: Any = (0.0, 0.0, 0.0)  # the third component is depth
    velocity: Any = (0.0, 0.0)
    velocity_variation: Any = (1.0, 1.0)
    rotation: float = 0.0
    angular_velocity: float = 0.0
    angular_velocity_variation: float = 0.0
    birth_size: Any = (0.0, 0.0)
    death_size: Any = (1.0, 1.0)
    life_time: float = 1.0
    rendering_props: Particle2DRenderingProps = field(default_factory=Particle2DRenderingProps)


@dataclass
class Particle:
    position: Vec3 = (0.0, 0.0, 0.0)
    velocity: Vec2 = (0.0, 0.0)
    rotation: float = 0.0
    angular_velocity: float = 0.0
    birth_size: Vec2 = (0.0, 0.0)
    death_size: Vec2 = (1.0, 1.0)
    life_time: float = 0.0
    life_left: float = 0.0
    rendering_props: Particle2DRenderingProps = field(default_factory=Particle2DRenderingProps)
    active: bool = False


class ParticleSystem2D:
    """A fixed pool of particles reused in ring order."""

    def __init__(self, pool_size: int = 100000, rng: Optional[random.Random] = None) -> None:
        if pool_size < 1:
            raise ValueError("pool_size must be at least 1")
        self._pool: List[Particle] = [Particle() for _ in range(pool_size)]
        self._next_index = pool_size - 1
        self._rng = rng if rng is not None else random.Random()

    @property
    def pool(self) -> Tuple[Particle, ...]:
        return tuple(self._pool)

    def emit(self, props: Particle2DProps) -> Particle:
        """Emit a single particle and return it."""
        particle = self._pool[self._next_index]
        particle.active = True

        particle.position = _position(props.position)
        particle.rotation = float(props.rotation)

        vx, vy = _vec(props.velocity, 2)
        wx, wy = _vec(props.velocity_variation, 2)
        rx = self._rng.uniform(-1.0, 1.0)
        ry = self._rng.uniform(-1.0, 1.0)
        particle.velocity = (vx + wx * rx, vy + wy * ry)
        particle.angular_velocity = float(props.angular_velocity) + float(
            props.angular_velocity_variation
        ) * self._rng.uniform(-1.0, 1.0)

        particle.rendering_props = replace(props.rendering_props)
        particle.birth_size = _vec(props.birth_size, 2)
        particle.death_size = _vec(props.death_size, 2)
        particle.life_time = particle.life_left = float(props.life_time)

        self._next_index = (self._next_index + 1) % len(self._pool)
        return particle

    def active_particles(self) -> List[Particle]:
        return [particle for particle in self._pool if particle.active]

    def update_and_render(
        self,
        delta_time: float,
        view_matrix: Any,
        camera: Camera,
        renderer: Renderer2D,
        use_depth_testing: bool = True,
    ) -> None:
        command = renderer.render_command
        depth_test_was_enabled = command.is_depth_testing_enabled()
        bad_state = use_depth_testing != depth_test_was_enabled
        if bad_state:
            command.set_depth_testing(use_depth_testing)

        try:
            renderer.begin_scene(view_matrix, camera)
            depth = 0.0
            for particle in self._pool:
                if not particle.active:
                    continue

                particle.life_left -= delta_time
                if particle.life_left <= 0.0:
                    particle.active = False
                    continue

                x, y, z = particle.position
                particle.position = (
                    x + particle.velocity[0] * delta_time,
                    y + particle.velocity[1] * delta_time,
                    z,
                )
                particle.rotation += particle.angular_velocity * delta_time

                if use_depth_testing:
                    depth += _DEPTH_STEP

                ratio = particle.life_left / particle.life_time  # 1 = new, 0 = old
                looks = particle.rendering_props
                color = _mix(looks.death_color, looks.birth_color, ratio)
                size = _mix(particle.death_size, particle.birth_size, ratio)
                px, py, pz = particle.position
                position = (px, py, pz + depth)

                if looks.sprite is not None:
                    quad = TexturedQuadProps(
                        tint=color,
                        sprite=looks.sprite,
                        tiling=looks.tiling,
                        offset=looks.offset,
                        flip=looks.flip,
                    )
                    renderer.draw_quad(position, particle.rotation, size, quad)
                else:
                    renderer.draw_quad(position, particle.rotation, size, color)
            renderer.end_scene()
        finally:
            if bad_state:
                command.set_depth_testing(depth_test_was_enabled)