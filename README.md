# overengine

Building blocks for a small 2D game engine, written in plain Python with
`numpy` for the maths and `pyyaml` for layout files.

## What is in it

- **Events** (`overengine.events`): window, keyboard and mouse events
  (`WindowResizeEvent`, `KeyPressedEvent`, `MouseMovedEvent`, ...) with
  `EventType` and `EventCategory` flags, `KeyCode` and `KeyTrigger` values,
  and an `EventDispatcher` whose `dispatch(event_class, func)` calls the
  handler only when the event is of that class and marks the event handled
  when the handler returns true.
- **Layers** (`overengine.layers`): `Layer` with `on_attach`, `on_detach`,
  `on_update`, `on_imgui_render` and `on_event` hooks, and a `LayerStack`
  that keeps overlays after ordinary layers. The stack can be iterated
  forwards or with `reversed()`.
- **Undo and redo** (`overengine.actions`): `Action` objects that set one of
  two values through a setter, and an `ActionStack` with `do`, `undo`,
  `redo` and `reset`. The most recently created stack is returned by
  `ActionStack.get_active_instance()`.
- **Profiling** (`overengine.instrumentor`): an `Instrumentor` that writes
  Chrome trace-event JSON files, `InstrumentationTimer` usable as a context
  manager, the `profile_function` decorator and `cleanup_output_string`.
- **Rendering** (`overengine.buffer`, `overengine.render_api`,
  `overengine.texture`, `overengine.shader`, `overengine.renderer`,
  `overengine.renderer2d`): `BufferLayout` with computed offsets and stride,
  in-memory `VertexBuffer`, `IndexBuffer` and `VertexArray`, a `RendererAPI`
  back end driven through `RenderCommand`, `Camera`, `FrameBuffer`,
  `Texture2D` and `SubTexture2D`, `Shader` and `ShaderLibrary`, the scene
  front end `Renderer`, and the batching `Renderer2D` that turns quads into
  `QuadVertex` records and keeps `Statistics`.
- **Particles** (`overengine.particles`): `ParticleSystem2D` with a fixed
  pool reused in ring order, `emit`, `active_particles` and
  `update_and_render`, which draws through a `Renderer2D`.
- **Docking layouts** (`overengine.docking`): a tree of `DockNode`s with
  `DockNodeFlags`, which `DockingLayout` loads from and saves to YAML files.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Dispatching events through layers:

```python
from overengine.events import EventDispatcher, WindowResizeEvent
from overengine.layers import Layer, LayerStack


class GameLayer(Layer):
    def on_event(self, event):
        EventDispatcher(event).dispatch(WindowResizeEvent, self.on_resize)

    def on_resize(self, event):
        print(event)  # WindowResizeEvent: 1280, 720
        return True


stack = LayerStack()
stack.push_layer(GameLayer("Game"))

event = WindowResizeEvent(1280, 720)
for layer in reversed(stack):
    layer.on_event(event)
    if event.handled:
        break
```

Undoing a change:

```python
from overengine.actions import Action, ActionStack

state = {"speed": 1.0}
stack = ActionStack()
stack.do(Action(lambda value: state.update(speed=value), 1.0, 2.5))
assert state["speed"] == 2.5
stack.undo()
assert state["speed"] == 1.0
```

Profiling into a trace file that `chrome://tracing` can open:

```python
from overengine.instrumentor import InstrumentationTimer, Instrumentor

profiler = Instrumentor.get()
profiler.begin_session("Startup", "startup.json")
with InstrumentationTimer("load assets"):
    ...
profiler.end_session()
```

Batching quads:

```python
import numpy as np

from overengine.render_api import Camera, RenderCommand, RendererAPI
from overengine.renderer2d import Renderer2D

command = RenderCommand(RendererAPI())
command.init()
renderer = Renderer2D(command, max_quad_count=1000)

renderer.begin_scene(np.identity(4), Camera())
renderer.draw_quad((0.0, 0.0), 0.0, (1.0, 1.0), (1.0, 0.0, 0.0, 1.0))
renderer.end_scene()

assert renderer.statistics.draw_calls == 1
assert len(command.api.draw_calls) == 1
```

## What it does not do

The rendering side is headless. `RendererAPI` records the viewport, clear
colour, clears and draw calls it is given instead of talking to a graphics
card, buffers and textures are held in memory, and `Shader` stores its
sources and uploaded uniform values without compiling anything. There is no
window, no input polling and no application loop: events are built and
dispatched by the caller. `DockingLayout` reads and writes layout files only;
it does not apply a layout to any user interface.