"""Vertex layouts plus in-memory vertex, index and vertex-array objects."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np


class ShaderDataType(IntEnum):
    NONE = 0
    FLOAT = 1
    FLOAT2 = 2
    FLOAT3 = 3
    FLOAT4 = 4
    MAT3 = 5
    MAT4 = 6
    INT = 7
    INT2 = 8
    INT3 = 9
    INT4 = 10
    BOOL = 11


# data type -> (size in bytes, component count)
_TYPE_INFO = {
    ShaderDataType.FLOAT: (4, 1),
    ShaderDataType.FLOAT2: (4 * 2, 2),
    ShaderDataType.FLOAT3: (4 * 3, 3),
    ShaderDataType.FLOAT4: (4 * 4, 4),
    ShaderDataType.MAT3: (4 * 3 * 3, 3 * 3),
    ShaderDataType.MAT4: (4 * 4 * 4, 4 * 4),
    ShaderDataType.INT: (4, 1),
    ShaderDataType.INT2: (4 * 2, 2),
    ShaderDataType.INT3: (4 * 3, 3),
    ShaderDataType.INT4: (4 * 4, 4),
    ShaderDataType.BOOL: (1, 1),
}


def _type_info(data_type: Any) -> Tuple[int, int]:
    try:
        return _TYPE_INFO[ShaderDataType(data_type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown ShaderDataType: {data_type!r}") from None


def shader_data_type_size(data_type: ShaderDataType) -> int:
    """Size in bytes of one value of ``data_type``."""
    return _type_info(data_type)[0]


@dataclass
class BufferElement:
    """One named attribute inside a vertex layout."""

    data_type: ShaderDataType
    name: str
    normalized: bool = False
    size: int = field(init=False)
    offset: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.size = shader_data_type_size(self.data_type)

    def component_count(self) -> int:
        return _type_info(self.data_type)[1]


ElementSpec = Union[BufferElement, Tuple[Any, ...]]


class BufferLayout:
    """An ordered set of elements with computed offsets and stride."""

    def __init__(self, elements: Iterable[ElementSpec] = ()) -> None:
        self._elements: List[BufferElement] = [
            replace(item) if isinstance(item, BufferElement) else BufferElement(*item)
            for item in elements
        ]
        offset = 0
        for element in self._elements:
            element.offset = offset
            offset += element.size
        self.stride = offset

    @property
    def elements(self) -> Tuple[BufferElement, ...]:
        return tuple(self._elements)

    def __iter__(self) -> Iterator[BufferElement]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)


def _as_bytes(data: Any) -> bytes:
    return memoryview(data).tobytes()


class VertexBuffer:
    """Raw vertex bytes with an attached layout."""

    def __init__(self, vertices: Any = None, static_draw: bool = True) -> None:
        self.data = bytearray()
        self.static_draw = static_draw
        self.layout = BufferLayout()
        self.bound = False
        if vertices is not None:
            self.buffer_data(vertices, static_draw)

    @property
    def size(self) -> int:
        return len(self.data)

    def bind(self) -> None:
        self.bound = True

    def unbind(self) -> None:
        self.bound = False

    def buffer_data(self, vertices: Any, static_draw: bool = True) -> None:
        self.data = bytearray(_as_bytes(vertices))
        self.static_draw = static_draw

    def buffer_sub_data(self, vertices: Any, offset: int = 0) -> None:
        payload = _as_bytes(vertices)
        end = offset + len(payload)
        if offset < 0 or end > len(self.data):
            raise ValueError(
                f"sub-data range [{offset}, {end}) exceeds buffer size {len(self.data)}"
            )
        self.data[offset:end] = payload

    def allocate_storage(self, size: int) -> None:
        if size < 0:
            raise ValueError("storage size must not be negative")
        self.data = bytearray(size)


class IndexBuffer:
    """Unsigned 32-bit indices."""

    def __init__(self, indices: Optional[Iterable[int]] = None, static_draw: bool = True) -> None:
        self.indices = np.zeros(0, dtype=np.uint32)
        self.static_draw = static_draw
        self.bound = False
        if indices is not None:
            self.buffer_data(indices, static_draw)

    @property
    def count(self) -> int:
        return int(self.indices.size)

    def bind(self) -> None:
        self.bound = True

    def unbind(self) -> None:
        self.bound = False

    def buffer_data(self, indices: Iterable[int], static_draw: bool = True) -> None:
        self.indices = np.array(list(indices) if not isinstance(indices, np.ndarray) else indices,
                                dtype=np.uint32).ravel()
        self.static_draw = static_draw

    def buffer_sub_data(self, indices: Iterable[int], offset: int = 0) -> None:
        values = np.asarray(
            list(indices) if not isinstance(indices, np.ndarray) else indices, dtype=np.uint32
        ).ravel()
        end = offset + values.size
        if offset < 0 or end > self.indices.size:
            raise ValueError(
                f"sub-data range [{offset}, {end}) exceeds index count {self.indices.size}"
            )
        self.indices[offset:end] = values

    def allocate_storage(self, count: int) -> None:
        if count < 0:
            raise ValueError("index count must not be negative")
        self.indices = np.zeros(count, dtype=np.uint32)


class VertexArray:
    """Groups vertex buffers with an optional index buffer."""

    def __init__(self) -> None:
        self._vertex_buffers: List[VertexBuffer] = []
        self.index_buffer: Optional[IndexBuffer] = None
        self.bound = False

    @property
    def vertex_buffers(self) -> Tuple[VertexBuffer, ...]:
        return tuple(self._vertex_buffers)

    def bind(self) -> None:
        self.bound = True

    def unbind(self) -> None:
        self.bound = False

    def add_vertex_buffer(self, vertex_buffer: VertexBuffer) -> None:
        self._vertex_buffers.append(vertex_buffer)

    def set_index_buffer(self, index_buffer: IndexBuffer) -> None:
        self.index_buffer = index_buffer