"""Batched 2D quad renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import numpy as np

from overengine.buffer import BufferLayout, IndexBuffer, ShaderDataType, VertexArray, VertexBuffer
from overengine.render_api import Camera, DrawType, RenderCommand
from overengine.shader import Shader
from overengine.texture import Texture2D, TextureFlip, TextureType

MAX_TEXTURE_COUNT = 32
MAX_QUAD_COUNT = 1_000_000

_VERTEX_DTYPE = np.dtype(
    [
        ("a_Position0", np.float32, 3),
        ("a_Position1", np.float32, 3),
        ("a_Position2", np.float32, 3),
        ("a_Position3", np.float32, 3),
        ("a_Color", np.float32, 4),
        ("a_TexSlot", np.int32),
        ("a_TexCoord", np.float32, 4),
        ("a_TexRegion", np.float32, 4),
        ("a_TexRepeat", np.int32),
    ]
)

_CORNERS = np.array(
    [
        [-0.5, -0.5, 0.0, 1.0],
        [0.5, -0.5, 0.0, 1.0],
        [-0.5, 0.5, 0.0, 1.0],
        [0.5, 0.5, 0.0, 1.0],
    ],
    dtype=np.float64,
).T


def _zeros(n: int) -> np.ndarray:
    return np.zeros(n, dtype=np.float32)


@dataclass
class TexturedQuadProps:
    tint: Any = (1.0, 1.0, 1.0, 1.0)
    sprite: Optional[Texture2D] = None
    tiling: Any = (1.0, 1.0)
    offset: Any = (0.0, 0.0)
    flip: TextureFlip = TextureFlip.NONE
    # Useful for sub-textures
    force_tile: bool = False


@dataclass
class QuadVertex:
    """One quad as the batch shader consumes it."""

    position0: np.ndarray = field(default_factory=lambda: _zeros(3))
    position1: np.ndarray = field(default_factory=lambda: _zeros(3))
    position2: np.ndarray = field(default_factory=lambda: _zeros(3))
    position3: np.ndarray = field(default_factory=lambda: _zeros(3))
    color: np.ndarray = field(default_factory=lambda: np.ones(4, dtype=np.float32))
    tex_slot: int = -1
    tex_coord: np.ndarray = field(default_factory=lambda: _zeros(4))
    tex_region: np.ndarray = field(default_factory=lambda: _zeros(4))
    tex_repeat: int = 0


@dataclass
class Statistics:
    quad_count: int = 0
    draw_calls: int = 0

    def reset(self) -> None:
        self.quad_count = 0
        self.draw_calls = 0

    def index_count(self) -> int:
        return self.quad_count

    def vertex_count(self) -> int:
        return self.quad_count


def _mat4(value: Any) -> np.ndarray:
    matrix = np.array(value, dtype=np.float64)
    if matrix.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
    return matrix


def quad_transform(position: Any, rotation: float, size: Any) -> np.ndarray:
    """Translation * rotation about Z * scale."""
    pos = np.zeros(3)
    given = np.array(position, dtype=np.float64).ravel()
    if given.size not in (2, 3):
        raise ValueError("position needs two or three components")
    pos[: given.size] = given
    sx, sy = (float(v) for v in np.array(size, dtype=np.float64).ravel()[:2])
    c, s = np.cos(rotation), np.sin(rotation)
    translate = np.identity(4)
    translate[:3, 3] = pos
    rotate = np.identity(4)
    rotate[:2, :2] = [[c, -s], [s, c]]
    scale = np.diag([sx, sy, 1.0, 1.0])
    return translate @ rotate @ scale


class Renderer2D:
    """Collects quads into batches and draws each batch as one point draw call."""

    def __init__(
        self,
        render_command: Optional[RenderCommand] = None,
        shader: Optional[Shader] = None,
        max_quad_count: int = MAX_QUAD_COUNT,
    ) -> None:
        if max_quad_count < 2:
            raise ValueError("max_quad_count must be at least 2")
        if render_command is None:
            render_command = RenderCommand()
            render_command.init()
        self.render_command = render_command
        self.max_quad_count = max_quad_count
        self.statistics = Statistics()

        self.vertex_array = VertexArray()
        self.vertex_buffer = VertexBuffer()
        self.vertex_buffer.layout = BufferLayout(
            [
                (ShaderDataType.FLOAT3, "a_Position0"),
                (ShaderDataType.FLOAT3, "a_Position1"),
                (ShaderDataType.FLOAT3, "a_Position2"),
                (ShaderDataType.FLOAT3, "a_Position3"),
                (ShaderDataType.FLOAT4, "a_Color"),
                (ShaderDataType.INT, "a_TexSlot"),
                (ShaderDataType.FLOAT4, "a_TexCoord"),
                (ShaderDataType.FLOAT4, "a_TexRegion"),
                (ShaderDataType.INT, "a_TexRepeat"),
            ]
        )
        self.vertex_array.add_vertex_buffer(self.vertex_buffer)
        self.vertex_array.set_index_buffer(
            IndexBuffer(np.arange(max_quad_count, dtype=np.uint32))
        )

        self.shader = shader if shader is not None else Shader("BatchRenderer2D")
        self.shader.bind()
        self.shader.upload_uniform_int_array("u_Slots", range(MAX_TEXTURE_COUNT))

        self._vertices: List[QuadVertex] = []
        self._bind_list: List[Optional[Texture2D]] = [None] * MAX_TEXTURE_COUNT
        self.texture_count = 0
        self.view_projection_matrix = np.identity(4)
        self.depth_sorting = True

    @property
    def quad_count(self) -> int:
        return len(self._vertices)

    @property
    def vertices(self) -> Tuple[QuadVertex, ...]:
        return tuple(self._vertices)

    @property
    def texture_bind_list(self) -> Tuple[Texture2D, ...]:
        return tuple(t for t in self._bind_list[: self.texture_count] if t is not None)

    def reset(self) -> None:
        self.start_batch()
        self.statistics.reset()

    def begin_scene(self, view_matrix: Any, camera: Camera, depth_sorting: bool = True) -> None:
        self.view_projection_matrix = _mat4(camera.projection) @ _mat4(view_matrix)
        self.depth_sorting = depth_sorting
        self.reset()
        self.start_batch()

    def end_scene(self) -> None:
        self.flush()

    def start_batch(self) -> None:
        self._vertices = []
        self.texture_count = 0

    def next_batch(self) -> None:
        self.flush()
        self.start_batch()

    def flush(self) -> None:
        if not self._vertices:
            return
        if self.depth_sorting:
            self._vertices.sort(key=lambda v: float(v.position0[2]), reverse=True)

        self.vertex_buffer.buffer_data(self._pack(), static_draw=False)
        for slot, texture in enumerate(self._bind_list[: self.texture_count]):
            if texture is not None:
                texture.bind(slot)

        self.vertex_array.bind()
        self.shader.bind()
        self.render_command.draw_indexed(self.vertex_array, len(self._vertices), DrawType.POINTS)
        self.statistics.draw_calls += 1

    def _pack(self) -> np.ndarray:
        packed = np.zeros(len(self._vertices), dtype=_VERTEX_DTYPE)
        columns = {
            "a_Position0": "position0",
            "a_Position1": "position1",
            "a_Position2": "position2",
            "a_Position3": "position3",
            "a_Color": "color",
            "a_TexSlot": "tex_slot",
            "a_TexCoord": "tex_coord",
            "a_TexRegion": "tex_region",
            "a_TexRepeat": "tex_repeat",
        }
        for column, attribute in columns.items():
            packed[column] = [getattr(v, attribute) for v in self._vertices]
        return packed

    def _corner_positions(self, vertex: QuadVertex, transform: np.ndarray) -> None:
        corners = ((self.view_projection_matrix @ transform) @ _CORNERS)[:3].T
        vertex.position0, vertex.position1, vertex.position2, vertex.position3 = (
            corner.astype(np.float32) for corner in corners
        )

    def _commit(self, vertex: QuadVertex) -> None:
        self._vertices.append(vertex)
        self.statistics.quad_count += 1

    def draw_quad(
        self, position: Any, rotation: float, size: Any, appearance: Any = None
    ) -> None:
        """Draw a quad from position, rotation (radians) and size.

        ``appearance`` is either a colour or a :class:`TexturedQuadProps`.
        """
        self.draw_quad_transform(quad_transform(position, rotation, size), appearance)

    def draw_quad_transform(self, transform: Any, appearance: Any = None) -> None:
        matrix = _mat4(transform)
        if appearance is None:
            appearance = TexturedQuadProps()
        if isinstance(appearance, TexturedQuadProps):
            self._draw_textured(matrix, appearance)
        else:
            self._draw_flat(matrix, appearance)

    def _draw_flat(self, transform: np.ndarray, color: Any) -> None:
        rgba = np.array(color, dtype=np.float32).ravel()
        if rgba.size != 4:
            raise ValueError("color needs four components")
        if rgba[3] == 0:
            return
        if len(self._vertices) + 1 >= self.max_quad_count:
            self.next_batch()

        vertex = QuadVertex(color=rgba, tex_slot=-1)
        self._corner_positions(vertex, transform)
        self._commit(vertex)

    def _texture_slot(self, texture: Texture2D) -> int:
        for slot, bound in enumerate(self._bind_list[: self.texture_count]):
            if bound is texture:
                return slot
        slot = self.texture_count
        limit = min(self.render_command.max_texture_slot_count, MAX_TEXTURE_COUNT)
        if slot + 1 > limit:
            self.next_batch()
            slot = 0
        self._bind_list[slot] = texture
        self.texture_count += 1
        return slot

    def _draw_textured(self, transform: np.ndarray, props: TexturedQuadProps) -> None:
        sprite = props.sprite
        if sprite is None:
            return
        tint = np.array(props.tint, dtype=np.float32).ravel()
        if tint.size != 4:
            raise ValueError("tint needs four components")
        if tint[3] == 0:
            return
        if len(self._vertices) + 1 >= self.max_quad_count:
            self.next_batch()

        is_sub = sprite.type == TextureType.SUB_TEXTURE
        gpu_texture = getattr(sprite, "master_texture", None) if is_sub else sprite
        if gpu_texture is None:
            raise ValueError("sub-texture has no master texture")

        vertex = QuadVertex(color=tint)
        vertex.tex_slot = self._texture_slot(gpu_texture)
        self._corner_positions(vertex, transform)

        if sprite.type == TextureType.MASTER:
            coord = np.array([0, 0, 1, 1], dtype=np.float32)
        else:
            coord = np.array(sprite.rect, dtype=np.float32).copy()  # type: ignore[attr-defined]
        vertex.tex_repeat = int(bool(props.force_tile))

        flip = int(props.flip)
        flip_x = flip & int(TextureFlip.X)
        flip_y = flip & int(TextureFlip.Y)

        if props.force_tile:
            region = coord.copy()
            region[0] += flip_x * region[2]
            region[2] *= -1 if flip_x else 1
            region[1] += flip_y * region[3]
            region[3] *= -1 if flip_y else 1
            vertex.tex_region = region

        tile_x, tile_y = (float(v) for v in np.array(props.tiling, dtype=np.float64).ravel()[:2])
        off_x, off_y = (float(v) for v in np.array(props.offset, dtype=np.float64).ravel()[:2])
        coord[0] *= tile_x
        coord[1] *= tile_y
        coord[2] *= tile_x
        coord[3] *= tile_y
        coord[0] += off_x
        coord[1] += off_y
        coord[0] += flip_x * coord[2]
        coord[2] *= -1 if flip_x else 1
        coord[1] += flip_x * coord[3]
        coord[3] *= -1 if flip_y else 1
        vertex.tex_coord = coord

        self._commit(vertex)