import random

import numpy as np
import pytest

from overengine.particles import (
    Particle2DProps,
    Particle2DRenderingProps,
    ParticleSystem2D,
)
from overengine.render_api import Camera
from overengine.renderer2d import Renderer2D
from overengine.texture import Texture2D


@pytest.fixture
def renderer():
    return Renderer2D(max_quad_count=100)


def still_props(**kwargs):
    base = dict(velocity=(2.0, 0.0), velocity_variation=(0.0, 0.0), life_time=1.0)
    base.update(kwargs)
    return Particle2DProps(**base)


def test_invalid_pool_size():
    with pytest.raises(ValueError):
        ParticleSystem2D(0)


def test_first_emit_uses_last_slot_then_wraps():
    system = ParticleSystem2D(3)
    system.emit(still_props())
    assert system.pool[2].active
    assert not system.pool[0].active
    system.emit(still_props())
    assert system.pool[0].active
    assert len(system.active_particles()) == 2


def test_pool_reuses_slots_when_full():
    system = ParticleSystem2D(2)
    for _ in range(5):
        system.emit(still_props())
    assert len(system.active_particles()) == 2


def test_velocity_variation_stays_in_range():
    system = ParticleSystem2D(50, rng=random.Random(3))
    for _ in range(50):
        particle = system.emit(Particle2DProps(velocity=(1.0, -1.0), velocity_variation=(0.5, 2.0)))
        assert 0.5 <= particle.velocity[0] <= 1.5
        assert -3.0 <= particle.velocity[1] <= 1.0


def test_update_moves_and_draws(renderer):
    system = ParticleSystem2D(4)
    system.emit(still_props())
    system.update_and_render(0.25, np.identity(4), Camera(), renderer)
    particle = system.active_particles()[0]
    assert particle.position[0] == pytest.approx(0.5)
    assert particle.life_left == pytest.approx(0.75)
    assert renderer.statistics.quad_count == 1
    assert renderer.statistics.draw_calls == 1


def test_color_fades_towards_death_color(renderer):
    system = ParticleSystem2D(4)
    system.emit(still_props())
    system.update_and_render(0.25, np.identity(4), Camera(), renderer)
    color = renderer.vertices[0].color
    assert float(color[3]) == pytest.approx(0.75)


def test_expired_particle_is_deactivated(renderer):
    system = ParticleSystem2D(4)
    system.emit(still_props())
    system.update_and_render(1.0, np.identity(4), Camera(), renderer)
    assert system.active_particles() == []
    assert renderer.statistics.quad_count == 0
    assert renderer.statistics.draw_calls == 0


def test_depth_testing_state_is_restored(renderer):
    command = renderer.render_command
    command.disable_depth_testing()
    system = ParticleSystem2D(4)
    system.emit(still_props())
    system.update_and_render(0.1, np.identity(4), Camera(), renderer, use_depth_testing=True)
    assert command.is_depth_testing_enabled() is False

    command.enable_depth_testing()
    system.update_and_render(0.1, np.identity(4), Camera(), renderer, use_depth_testing=False)
    assert command.is_depth_testing_enabled() is True


def test_sprite_particles_bind_texture(renderer):
    texture = Texture2D(4, 4)
    looks = Particle2DRenderingProps(sprite=texture)
    system = ParticleSystem2D(4)
    system.emit(still_props(rendering_props=looks))
    system.update_and_render(0.1, np.identity(4), Camera(), renderer)
    assert renderer.vertices[0].tex_slot == 0
    assert texture.bound_slot == 0


def test_rendering_props_are_copied():
    looks = Particle2DRenderingProps()
    system = ParticleSystem2D(2)
    particle = system.emit(still_props(rendering_props=looks))
    looks.birth_color = (0.0, 0.0, 0.0, 0.0)
    assert particle.rendering_props.birth_color == (1.0, 1.0, 1.0, 1.0)


def test_bad_position_rejected():
    system = ParticleSystem2D(2)
    with pytest.raises(ValueError):
        system.emit(Particle2DProps(position=(1.0,)))