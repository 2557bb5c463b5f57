"""Shader programs held in memory and a named shader library."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import numpy as np

_log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _vector(value: Any, size: int) -> np.ndarray:
    array = np.array(value, dtype=np.float32).ravel()
    if array.size != size:
        raise ValueError(f"expected {size} components, got {array.size}")
    return array


def _matrix(value: Any, size: int) -> np.ndarray:
    array = np.array(value, dtype=np.float32)
    if array.shape != (size, size):
        raise ValueError(f"expected a {size}x{size} matrix, got shape {array.shape}")
    return array


class Shader:
    """A shader program: its sources plus the uniform values uploaded to it."""

    def __init__(
        self,
        name: str,
        vertex_src: str = "",
        fragment_src: str = "",
        *,
        file_path: Optional[PathLike] = None,
        source: Optional[str] = None,
    ) -> None:
        self.name = name
        self.vertex_src = vertex_src
        self.fragment_src = fragment_src
        self.file_path = Path(file_path) if file_path is not None else None
        self.source = source
        self.uniforms: Dict[str, Any] = {}
        self.bound = False

    @classmethod
    def from_file(cls, file_path: PathLike, name: Optional[str] = None) -> "Shader":
        """Read a shader file; its name defaults to the file name without suffix."""
        path = Path(file_path)
        text = path.read_text(encoding="utf-8")
        return cls(name if name is not None else path.stem, file_path=path, source=text)

    def bind(self) -> None:
        self.bound = True

    def unbind(self) -> None:
        self.bound = False

    def upload_uniform_int(self, name: str, value: int) -> None:
        self.uniforms[name] = int(value)

    def upload_uniform_int_array(self, name: str, values: Iterable[int]) -> None:
        self.uniforms[name] = np.array(list(values), dtype=np.int32)

    def upload_uniform_float(self, name: str, value: float) -> None:
        self.uniforms[name] = float(value)

    def upload_uniform_float2(self, name: str, value: Any) -> None:
        self.uniforms[name] = _vector(value, 2)

    def upload_uniform_float3(self, name: str, value: Any) -> None:
        self.uniforms[name] = _vector(value, 3)

    def upload_uniform_float4(self, name: str, value: Any) -> None:
        self.uniforms[name] = _vector(value, 4)

    def upload_uniform_mat3(self, name: str, matrix: Any) -> None:
        self.uniforms[name] = _matrix(matrix, 3)

    def upload_uniform_mat4(self, name: str, matrix: Any) -> None:
        self.uniforms[name] = _matrix(matrix, 4)

    def reload(self, file_path: Optional[PathLike] = None) -> bool:
        """Re-read the shader from a file; returns whether it succeeded."""
        path = Path(file_path) if file_path is not None else self.file_path
        if path is None:
            _log.error("Shader '%s' has no file to reload from.", self.name)
            return False
        try:
            text = path.read_text(encoding="utf-8")
        except OSError:
            _log.error("Shader '%s' could not read '%s'.", self.name, path)
            return False
        self.file_path = path
        self.source = text
        self.uniforms.clear()
        return True


class ShaderLibrary:
    """Shaders stored under unique names."""

    def __init__(self) -> None:
        self._shaders: Dict[str, Shader] = {}

    def add(self, shader: Shader, name: Optional[str] = None) -> None:
        key = shader.name if name is None else name
        if key in self._shaders:
            raise ValueError(f"Shader '{key}' already exists!")
        self._shaders[key] = shader

    def load(self, file_path: PathLike, name: Optional[str] = None) -> Shader:
        shader = Shader.from_file(file_path)
        self.add(shader, name)
        return shader

    def get(self, name: str) -> Shader:
        try:
            return self._shaders[name]
        except KeyError:
            raise KeyError(f"Shader '{name}' not found!") from None

    def exists(self, name: str) -> bool:
        return name in self._shaders

    def __contains__(self, name: object) -> bool:
        return name in self._shaders