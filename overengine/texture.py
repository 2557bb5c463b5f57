"""Texture enumerations, in-memory 2D textures and sub-textures."""

from __future__ import annotations

import itertools
import logging
from abc import ABC, abstractmethod
from enum import IntEnum, IntFlag
from typing import Any, Optional

import numpy as np

_log = logging.getLogger(__name__)
_renderer_ids = itertools.count(1)


class TextureType(IntEnum):
    NONE = 0
    MASTER = 1
    SUB_TEXTURE = 2


class TextureFilter(IntEnum):
    NONE = 0
    NEAREST = 1
    BI_LINEAR = 2


class TextureWrap(IntEnum):
    NONE = 0
    REPEAT = 1
    CLAMP = 2
    MIRROR = 3


class TextureFormat(IntEnum):
    NONE = 0
    RGB8 = 1
    RGBA8 = 2


class TextureFlip(IntFlag):
    NONE = 0
    X = 1 << 0
    Y = 1 << 1
    BOTH = X | Y


class Texture(ABC):
    """Common interface of all textures."""

    def __init__(self, guid: Optional[int] = None) -> None:
        self.guid = guid

    @property
    @abstractmethod
    def width(self) -> int: ...

    @property
    @abstractmethod
    def height(self) -> int: ...

    @property
    @abstractmethod
    def renderer_id(self) -> int: ...

    @property
    @abstractmethod
    def filter(self) -> TextureFilter: ...

    @property
    @abstractmethod
    def u_wrap(self) -> TextureWrap: ...

    @property
    @abstractmethod
    def v_wrap(self) -> TextureWrap: ...

    @property
    @abstractmethod
    def format(self) -> TextureFormat: ...

    @property
    @abstractmethod
    def type(self) -> TextureType: ...

    @abstractmethod
    def bind(self, slot: int = 0) -> None: ...

    def set_wrap(self, wrap: TextureWrap) -> None:
        self.u_wrap = wrap  # type: ignore[misc]
        self.v_wrap = wrap  # type: ignore[misc]


class Texture2D(Texture):
    """A master 2D texture of a given size and format."""

    def __init__(
        self,
        width: int,
        height: int,
        format: TextureFormat = TextureFormat.RGBA8,
        *,
        filter: TextureFilter = TextureFilter.BI_LINEAR,
        wrap: TextureWrap = TextureWrap.REPEAT,
        guid: Optional[int] = None,
    ) -> None:
        super().__init__(guid)
        if width < 0 or height < 0:
            raise ValueError("texture dimensions must not be negative")
        self._width = width
        self._height = height
        self._format = TextureFormat(format)
        self._filter = TextureFilter(filter)
        self._u_wrap = TextureWrap(wrap)
        self._v_wrap = TextureWrap(wrap)
        self._renderer_id = next(_renderer_ids)
        self.bound_slot: Optional[int] = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def renderer_id(self) -> int:
        return self._renderer_id

    @property
    def filter(self) -> TextureFilter:
        return self._filter

    @filter.setter
    def filter(self, value: TextureFilter) -> None:
        self._filter = TextureFilter(value)

    @property
    def u_wrap(self) -> TextureWrap:
        return self._u_wrap

    @u_wrap.setter
    def u_wrap(self, value: TextureWrap) -> None:
        self._u_wrap = TextureWrap(value)

    @property
    def v_wrap(self) -> TextureWrap:
        return self._v_wrap

    @v_wrap.setter
    def v_wrap(self, value: TextureWrap) -> None:
        self._v_wrap = TextureWrap(value)

    @property
    def format(self) -> TextureFormat:
        return self._format

    @property
    def type(self) -> TextureType:
        return TextureType.MASTER

    def bind(self, slot: int = 0) -> None:
        if slot < 0:
            raise ValueError("texture slot must not be negative")
        self.bound_slot = slot


class SubTexture2D(Texture2D):
    """A rectangular region of a master texture, stored in normalized units."""

    def __init__(
        self,
        texture: Optional[Texture2D] = None,
        rect: Optional[Any] = None,
        *,
        guid: Optional[int] = None,
    ) -> None:
        Texture.__init__(self, guid)
        self.master_texture: Optional[Texture2D] = texture
        if texture is None:
            self.rect = np.zeros(4, dtype=np.float32)
            return
        if rect is None:
            raise ValueError("a sub-texture of a master texture needs a rect")
        if texture.width == 0 or texture.height == 0:
            raise ValueError("cannot take a sub-texture of an empty texture")
        region = np.array(rect, dtype=np.float32).ravel()
        if region.size != 4:
            raise ValueError("rect needs four components: x, y, width, height")
        scale = np.array(
            [texture.width, texture.height, texture.width, texture.height], dtype=np.float32
        )
        self.rect = region / scale

    def _master(self) -> Texture2D:
        if self.master_texture is None:
            raise RuntimeError("sub-texture has no master texture")
        return self.master_texture

    def acquire(self, other: Any) -> None:
        if isinstance(other, SubTexture2D):
            self.master_texture = other.master_texture

    @property
    def width(self) -> int:
        return int(self.rect[2])

    @property
    def height(self) -> int:
        return int(self.rect[3])

    @property
    def renderer_id(self) -> int:
        return self._master().renderer_id

    def bind(self, slot: int = 0) -> None:
        self._master().bind(slot)

    @property
    def filter(self) -> TextureFilter:
        return self._master().filter

    @filter.setter
    def filter(self, value: TextureFilter) -> None:
        _log.warning("Cannot set the filter of a sub-texture")

    @property
    def u_wrap(self) -> TextureWrap:
        return self._master().u_wrap

    @u_wrap.setter
    def u_wrap(self, value: TextureWrap) -> None:
        _log.warning("Cannot set the U wrap of a sub-texture")

    @property
    def v_wrap(self) -> TextureWrap:
        return self._master().v_wrap

    @v_wrap.setter
    def v_wrap(self, value: TextureWrap) -> None:
        _log.warning("Cannot set the V wrap of a sub-texture")

    @property
    def format(self) -> TextureFormat:
        return self._master().format

    @property
    def type(self) -> TextureType:
        return TextureType.SUB_TEXTURE

    def is_reference(self) -> bool:
        return self.master_texture is None