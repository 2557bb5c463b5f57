"""Layers and the ordered stack that holds layers below overlays."""

from __future__ import annotations

from typing import Iterator, List, Optional

from overengine.events import Event


class Layer:
    """A unit of per-frame behaviour; subclasses override the hooks.

    The default hooks record what happened to the layer, so a plain layer
    reports whether it is attached, the last frame time it saw, how many
    GUI frames it rendered and the last event it received.
    """

    def __init__(self, name: str = "Layer") -> None:
        self.name = name
        self.attached = False
        self.last_delta_time = 0.0
        self.imgui_frames = 0
        self.last_event: Optional[Event] = None

    def on_attach(self) -> None:
        self.attached = True

    def on_detach(self) -> None:
        self.attached = False

    def on_update(self, delta_time: float) -> None:
        self.last_delta_time = delta_time

    def on_imgui_render(self) -> None:
        self.imgui_frames += 1

    def on_event(self, event: Event) -> None:
        self.last_event = event

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class LayerStack:
    """Layers come first in insertion order, overlays always after them."""

    def __init__(self) -> None:
        self._layers: List[Layer] = []
        self._insert_index = 0

    def push_layer(self, layer: Layer) -> None:
        self._layers.insert(self._insert_index, layer)
        self._insert_index += 1
        layer.on_attach()

    def push_overlay(self, overlay: Layer) -> None:
        self._layers.append(overlay)
        overlay.on_attach()

    def pop_layer(self, layer: Layer) -> None:
        layers = self._layers[: self._insert_index]
        if any(item is layer for item in layers):
            layer.on_detach()
            position = next(i for i, item in enumerate(layers) if item is layer)
            del self._layers[position]
            self._insert_index -= 1

    def pop_overlay(self, overlay: Layer) -> None:
        overlays = self._layers[self._insert_index:]
        for offset, item in enumerate(overlays):
            if item is overlay:
                overlay.on_detach()
                del self._layers[self._insert_index + offset]
                return

    def __iter__(self) -> Iterator[Layer]:
        return iter(list(self._layers))

    def __reversed__(self) -> Iterator[Layer]:
        return reversed(list(self._layers))

    def __len__(self) -> int:
        return len(self._layers)