import numpy as np
import pytest

from overengine.buffer import IndexBuffer, VertexArray
from overengine.render_api import Camera, RenderCommand, RendererAPI
from overengine.renderer import Renderer
from overengine.shader import Shader


def make():
    api = RendererAPI(texture_slot_limit=16)
    renderer = Renderer(RenderCommand(api), max_quad_count=8)
    return renderer, api


def translation(x, y, z):
    matrix = np.identity(4, dtype=np.float32)
    matrix[:3, 3] = (x, y, z)
    return matrix


def test_init_initializes_backend_and_2d_renderer():
    renderer, api = make()
    renderer.init()
    assert api.initialized is True
    assert renderer.render_command.max_texture_slot_count == api.texture_slot_limit
    assert renderer.renderer2d.render_command is renderer.render_command
    assert renderer.renderer2d.max_quad_count == 8


def test_shutdown_drops_2d_renderer():
    renderer, _ = make()
    renderer.init()
    renderer.shutdown()
    assert renderer.renderer2d is None


def test_window_resize_sets_viewport():
    renderer, api = make()
    renderer.on_window_resize(800, 600)
    assert api.viewport == (0, 0, 800, 600)


def test_begin_scene_with_combined_matrix():
    renderer, _ = make()
    view_projection = translation(1, 2, 3)
    renderer.begin_scene(view_projection)
    np.testing.assert_allclose(renderer.scene_data.view_projection_matrix, view_projection)


def test_begin_scene_with_identity_camera_keeps_view():
    renderer, _ = make()
    view = translation(4, 5, 6)
    renderer.begin_scene(view, Camera())
    np.testing.assert_allclose(renderer.scene_data.view_projection_matrix, view)


def test_begin_scene_with_projection_and_identity_view():
    renderer, _ = make()
    projection = np.diag([2.0, 3.0, 1.0, 1.0])
    renderer.begin_scene(np.identity(4), projection)
    np.testing.assert_allclose(renderer.scene_data.view_projection_matrix, projection)


def test_begin_scene_rejects_bad_matrix():
    renderer, _ = make()
    with pytest.raises(ValueError):
        renderer.begin_scene(np.identity(3))


def test_submit_uploads_uniforms_and_draws():
    renderer, api = make()
    view_projection = translation(1, 0, 0)
    renderer.begin_scene(view_projection)
    shader = Shader("flat")
    vertex_array = VertexArray()
    vertex_array.set_index_buffer(IndexBuffer([0, 1, 2]))
    renderer.submit(shader, vertex_array)
    renderer.end_scene()
    assert shader.bound is True
    assert vertex_array.bound is True
    np.testing.assert_allclose(shader.uniforms["u_ViewProjMatrix"], view_projection)
    np.testing.assert_allclose(shader.uniforms["u_Transform"], np.identity(4))
    assert api.draw_calls[-1].vertex_array is vertex_array
    assert api.draw_calls[-1].index_count == 3


def test_submit_with_transform():
    renderer, _ = make()
    shader = Shader("flat")
    transform = translation(0, 7, 0)
    renderer.submit(shader, VertexArray(), transform)
    np.testing.assert_allclose(shader.uniforms["u_Transform"], transform)


def test_shader_library_is_shared():
    renderer, _ = make()
    shader = Shader("flat")
    renderer.shader_library.add(shader)
    assert renderer.shader_library.get("flat") is shader