"""Renderer state, draw commands, cameras and frame buffers."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np

from overengine.buffer import VertexArray

_renderer_ids = itertools.count(1)


class DrawType(IntEnum):
    NONE = 0
    POINTS = 1
    LINES = 2
    TRIANGLES = 3


class ClearFlags(IntFlag):
    NONE = 0
    CLEAR_COLOR = 1 << 0
    CLEAR_DEPTH = 1 << 1


class Camera:
    """A projection matrix; identity unless one is given."""

    def __init__(self, projection: Optional[Any] = None) -> None:
        if projection is None:
            self.projection = np.identity(4, dtype=np.float32)
        else:
            matrix = np.array(projection, dtype=np.float32)
            if matrix.shape != (4, 4):
                raise ValueError(f"projection must be 4x4, got shape {matrix.shape}")
            self.projection = matrix


@dataclass
class FrameBufferProps:
    width: int
    height: int
    samples: int = 1
    swap_chain_target: bool = False


class FrameBuffer:
    """An off-screen render target."""

    def __init__(self, props: FrameBufferProps) -> None:
        self.props = FrameBufferProps(
            props.width, props.height, props.samples, props.swap_chain_target
        )
        self.color_attachment_renderer_id = next(_renderer_ids)
        self.bound = False

    def bind(self) -> None:
        self.bound = True

    def unbind(self) -> None:
        self.bound = False

    def resize(self, width: int, height: int) -> None:
        self.props.width = width
        self.props.height = height


@dataclass
class DrawCall:
    vertex_array: VertexArray
    index_count: int
    draw_type: DrawType


@dataclass
class RendererAPI:
    """Headless renderer back end that records the state it is given."""

    texture_size_limit: int = 8192
    texture_slot_limit: int = 32
    initialized: bool = False
    viewport: Tuple[int, int, int, int] = (0, 0, 0, 0)
    clear_color: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    clear_depth: float = 1.0
    depth_testing: bool = False
    clears: List[ClearFlags] = field(default_factory=list)
    draw_calls: List[DrawCall] = field(default_factory=list)

    def init(self) -> None:
        self.initialized = True

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.viewport = (x, y, width, height)

    def set_clear_color(self, color: Iterable[float]) -> None:
        values = tuple(float(c) for c in color)
        if len(values) != 4:
            raise ValueError("clear color needs four components")
        self.clear_color = values  # type: ignore[assignment]

    def set_clear_depth(self, depth: float) -> None:
        self.clear_depth = float(depth)

    def clear(self, flags: ClearFlags) -> None:
        self.clears.append(ClearFlags(flags))

    def draw_indexed(
        self,
        vertex_array: VertexArray,
        index_count: int = 0,
        draw_type: DrawType = DrawType.TRIANGLES,
    ) -> None:
        count = index_count
        if count == 0 and vertex_array.index_buffer is not None:
            count = vertex_array.index_buffer.count
        self.draw_calls.append(DrawCall(vertex_array, count, DrawType(draw_type)))

    def max_texture_size(self) -> int:
        return self.texture_size_limit

    def max_texture_slot_count(self) -> int:
        return self.texture_slot_limit

    def is_depth_testing_enabled(self) -> bool:
        return self.depth_testing

    def enable_depth_testing(self) -> None:
        self.depth_testing = True

    def disable_depth_testing(self) -> None:
        self.depth_testing = False


class RenderCommand:
    """Front end over a renderer back end; caches its limits on init."""

    def __init__(self, api: Optional[RendererAPI] = None) -> None:
        self.api = api if api is not None else RendererAPI()
        self._max_texture_size = 0
        self._max_texture_slot_count = 0

    @property
    def max_texture_size(self) -> int:
        return self._max_texture_size

    @property
    def max_texture_slot_count(self) -> int:
        return self._max_texture_slot_count

    def init(self) -> None:
        self.api.init()
        self._max_texture_size = self.api.max_texture_size()
        self._max_texture_slot_count = self.api.max_texture_slot_count()

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.api.set_viewport(x, y, width, height)

    def set_clear_color(self, color: Iterable[float]) -> None:
        self.api.set_clear_color(color)

    def set_clear_depth(self, depth: float) -> None:
        self.api.set_clear_depth(depth)

    def clear(self, flags: ClearFlags = ClearFlags.CLEAR_COLOR | ClearFlags.CLEAR_DEPTH) -> None:
        self.api.clear(flags)

    def draw_indexed(
        self,
        vertex_array: VertexArray,
        index_count: int = 0,
        draw_type: DrawType = DrawType.TRIANGLES,
    ) -> None:
        self.api.draw_indexed(vertex_array, index_count, draw_type)

    def is_depth_testing_enabled(self) -> bool:
        return self.api.is_depth_testing_enabled()

    def enable_depth_testing(self) -> None:
        self.api.enable_depth_testing()

    def disable_depth_testing(self) -> None:
        self.api.disable_depth_testing()

    def set_depth_testing(self, enabled: bool) -> None:
        if enabled:
            self.enable_depth_testing()
        else:
            self.disable_depth_testing()