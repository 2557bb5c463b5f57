"""Scene-level renderer front end."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from overengine.buffer import VertexArray
from overengine.render_api import Camera, RenderCommand
from overengine.renderer2d import MAX_QUAD_COUNT, Renderer2D
from overengine.shader import Shader, ShaderLibrary


def _mat4(value: Any) -> np.ndarray:
    matrix = np.array(value, dtype=np.float32)
    if matrix.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
    return matrix


@dataclass
class SceneData:
    view_projection_matrix: np.ndarray = field(
        default_factory=lambda: np.identity(4, dtype=np.float32)
    )


class Renderer:
    """Owns the render command, the 2D renderer and the shader library."""

    def __init__(
        self,
        render_command: Optional[RenderCommand] = None,
        max_quad_count: int = MAX_QUAD_COUNT,
    ) -> None:
        self.render_command = render_command if render_command is not None else RenderCommand()
        self.max_quad_count = max_quad_count
        self.scene_data = SceneData()
        self.shader_library = ShaderLibrary()
        self.renderer2d: Optional[Renderer2D] = None
        self.in_scene = False

    def init(self) -> None:
        self.render_command.init()
        self.renderer2d = Renderer2D(self.render_command, max_quad_count=self.max_quad_count)

    def shutdown(self) -> None:
        self.renderer2d = None

    def on_window_resize(self, width: int, height: int) -> None:
        self.render_command.set_viewport(0, 0, width, height)

    def begin_scene(self, view_matrix: Any, projection: Any = None) -> None:
        """Start a scene.

        With one argument it is the combined view-projection matrix; otherwise
        the view matrix is multiplied by the camera's or given projection.
        """
        view = _mat4(view_matrix)
        if projection is None:
            self.scene_data.view_projection_matrix = view
        else:
            if isinstance(projection, Camera):
                projection = projection.projection
            self.scene_data.view_projection_matrix = view @ _mat4(projection)
        self.in_scene = True

    def end_scene(self) -> None:
        """Close the current scene; the view-projection matrix is kept."""
        self.in_scene = False

    def submit(self, shader: Shader, vertex_array: VertexArray, transform: Any = None) -> None:
        shader.bind()
        shader.upload_uniform_mat4("u_ViewProjMatrix", self.scene_data.view_projection_matrix)
        shader.upload_uniform_mat4(
            "u_Transform", np.identity(4, dtype=np.float32) if transform is None else transform
        )
        vertex_array.bind()
        self.render_command.draw_indexed(vertex_array)