"""Blocking event types, key codes and an event dispatcher."""

from __future__ import annotations

from enum import IntEnum, IntFlag
from typing import Callable, ClassVar, Optional, Type


class KeyCode(IntEnum):
    """Keyboard and mouse button codes."""

    NONE = -1

    # Printable keys
    SPACE = 32
    APOSTROPHE = 39
    COMMA = 44
    MINUS = 45
    PERIOD = 46
    SLASH = 47
    ALPHA0 = 48
    ALPHA1 = 49
    ALPHA2 = 50
    ALPHA3 = 51
    ALPHA4 = 52
    ALPHA5 = 53
    ALPHA6 = 54
    ALPHA7 = 55
    ALPHA8 = 56
    ALPHA9 = 57
    SEMICOLON = 59
    EQUAL = 61
    A = 65
    B = 66
    C = 67
    D = 68
    E = 69
    F = 70
    G = 71
    H = 72
    I = 73  # noqa: E741
    J = 74
    K = 75
    L = 76
    M = 77
    N = 78
    O = 79  # noqa: E741
    P = 80
    Q = 81
    R = 82
    S = 83
    T = 84
    U = 85
    V = 86
    W = 87
    X = 88
    Y = 89
    Z = 90
    LEFT_BRACKET = 91
    BACK_SLASH = 92
    RIGHT_BRACKET = 93
    GRAVE_ACCENT = 96
    WORLD1 = 161
    WORLD2 = 162

    # Function keys
    ESCAPE = 256
    ENTER = 257
    TAB = 258
    BACKSPACE = 259
    INSERT = 260
    DELETE = 261
    RIGHT = 262
    LEFT = 263
    DOWN = 264
    UP = 265
    PAGE_UP = 266
    PAGE_DOWN = 267
    HOME = 268
    END = 269
    CAPS_LOCK = 280
    SCROLL_LOCK = 281
    NUM_LOCK = 282
    PRINT_SCREEN = 283
    PAUSE = 284
    F1 = 290
    F2 = 291
    F3 = 292
    F4 = 293
    F5 = 294
    F6 = 295
    F7 = 296
    F8 = 297
    F9 = 298
    F10 = 299
    F11 = 300
    F12 = 301
    F13 = 302
    F14 = 303
    F15 = 304
    F16 = 305
    F17 = 306
    F18 = 307
    F19 = 308
    F20 = 309
    F21 = 310
    F22 = 311
    F23 = 312
    F24 = 313
    F25 = 314
    KEY_PAD0 = 320
    KEY_PAD1 = 321
    KEY_PAD2 = 322
    KEY_PAD3 = 323
    KEY_PAD4 = 324
    KEY_PAD5 = 325
    KEY_PAD6 = 326
    KEY_PAD7 = 327
    KEY_PAD8 = 328
    KEY_PAD9 = 329
    KEY_PAD_DECIMAL = 330
    KEY_PAD_DIVIDE = 331
    KEY_PAD_MULTIPLY = 332
    KEY_PAD_SUBTRACT = 333
    KEY_PAD_ADD = 334
    KEY_PAD_ENTER = 335
    KEY_PAD_EQUAL = 336
    LEFT_SHIFT = 340
    LEFT_CONTROL = 341
    LEFT_ALT = 342
    LEFT_SUPER = 343
    RIGHT_SHIFT = 344
    RIGHT_CONTROL = 345
    RIGHT_ALT = 346
    RIGHT_SUPER = 347
    MENU = 348

    # Mouse buttons
    MOUSE_BUTTON_1 = 0
    MOUSE_BUTTON_2 = 1
    MOUSE_BUTTON_3 = 2
    MOUSE_BUTTON_4 = 3
    MOUSE_BUTTON_5 = 4
    MOUSE_BUTTON_6 = 5
    MOUSE_BUTTON_7 = 6
    MOUSE_BUTTON_8 = 7
    MOUSE_BUTTON_LAST = 7
    MOUSE_BUTTON_LEFT = 0
    MOUSE_BUTTON_RIGHT = 1
    MOUSE_BUTTON_MIDDLE = 2


class KeyTrigger(IntEnum):
    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class EventType(IntEnum):
    NONE = 0
    WINDOW_CLOSE = 1
    WINDOW_RESIZE = 2
    WINDOW_FOCUS = 3
    WINDOW_LOST_FOCUS = 4
    WINDOW_MOVED = 5
    KEY_PRESSED = 6
    KEY_RELEASED = 7
    KEY_TYPED = 8
    MOUSE_BUTTON_PRESSED = 9
    MOUSE_BUTTON_RELEASED = 10
    MOUSE_MOVED = 11
    MOUSE_SCROLLED = 12


class EventCategory(IntFlag):
    NONE = 0
    APPLICATION = 1 << 0
    INPUT = 1 << 1
    KEYBOARD = 1 << 2
    MOUSE = 1 << 3
    MOUSE_BUTTON = 1 << 4


def _fmt(value: float) -> str:
    return f"{value:g}"


class Event:
    """Base of all events; concrete subclasses set ``event_type``."""

    event_type: ClassVar[Optional[EventType]] = None
    category_flags: ClassVar[EventCategory] = EventCategory.NONE

    def __init__(self) -> None:
        self.handled = False

    @property
    def name(self) -> str:
        if self.event_type is None:
            raise TypeError(f"{type(self).__name__} has no concrete event type")
        return "".join(part.capitalize() for part in self.event_type.name.split("_"))

    def __str__(self) -> str:
        return self.name

    def is_in_category(self, category: EventCategory) -> bool:
        return bool(self.category_flags & category)


class EventDispatcher:
    """Routes one event to a handler when the handler's event class matches."""

    def __init__(self, event: Event) -> None:
        self.event = event

    def dispatch(self, event_class: Type[Event], func: Callable[[Event], bool]) -> bool:
        if event_class.event_type is None:
            raise TypeError(f"{event_class.__name__} cannot be dispatched on")
        if self.event.event_type == event_class.event_type:
            self.event.handled = self.event.handled or bool(func(self.event))
            return True
        return False


# Application events

class WindowCloseEvent(Event):
    event_type = EventType.WINDOW_CLOSE
    category_flags = EventCategory.APPLICATION


class WindowResizeEvent(Event):
    event_type = EventType.WINDOW_RESIZE
    category_flags = EventCategory.APPLICATION

    def __init__(self, width: int, height: int) -> None:
        super().__init__()
        self.width = width
        self.height = height

    def __str__(self) -> str:
        return f"WindowResizeEvent: {self.width}, {self.height}"


class WindowFocusEvent(Event):
    event_type = EventType.WINDOW_FOCUS
    category_flags = EventCategory.APPLICATION


class WindowLostFocusEvent(Event):
    event_type = EventType.WINDOW_LOST_FOCUS
    category_flags = EventCategory.APPLICATION


class WindowMovedEvent(Event):
    event_type = EventType.WINDOW_MOVED
    category_flags = EventCategory.APPLICATION

    def __init__(self, x: int, y: int) -> None:
        super().__init__()
        self.x = x
        self.y = y

    def __str__(self) -> str:
        return f"WindowMovedEvent: {self.x}, {self.y}"


# Key events

class KeyEvent(Event):
    category_flags = EventCategory.KEYBOARD | EventCategory.INPUT

    def __init__(self, key_code: KeyCode) -> None:
        super().__init__()
        self.key_code = key_code


class KeyPressedEvent(KeyEvent):
    event_type = EventType.KEY_PRESSED

    def __init__(self, key_code: KeyCode, repeat_count: int) -> None:
        super().__init__(key_code)
        self.repeat_count = repeat_count

    def __str__(self) -> str:
        return f"KeyPressedEvent: {int(self.key_code)} ({self.repeat_count} repeats)"


class KeyReleasedEvent(KeyEvent):
    event_type = EventType.KEY_RELEASED

    def __str__(self) -> str:
        return f"KeyReleasedEvent: {int(self.key_code)}"


class KeyTypedEvent(KeyEvent):
    event_type = EventType.KEY_TYPED

    def __str__(self) -> str:
        return f"KeyTypedEvent: {int(self.key_code)}"


# Mouse events

class MouseMovedEvent(Event):
    event_type = EventType.MOUSE_MOVED
    category_flags = EventCategory.MOUSE | EventCategory.INPUT

    def __init__(self, x: float, y: float) -> None:
        super().__init__()
        self.x = x
        self.y = y

    def __str__(self) -> str:
        return f"MouseMovedEvent: {_fmt(self.x)}, {_fmt(self.y)}"


class MouseScrolledEvent(Event):
    event_type = EventType.MOUSE_SCROLLED
    category_flags = EventCategory.MOUSE | EventCategory.INPUT

    def __init__(self, x_offset: float, y_offset: float) -> None:
        super().__init__()
        self.x_offset = x_offset
        self.y_offset = y_offset

    def __str__(self) -> str:
        return f"MouseScrolledEvent: {_fmt(self.x_offset)}, {_fmt(self.y_offset)}"


class MouseButtonEvent(Event):
    category_flags = EventCategory.MOUSE | EventCategory.MOUSE_BUTTON | EventCategory.INPUT

    def __init__(self, button: int) -> None:
        super().__init__()
        self.button = button


class MouseButtonPressedEvent(MouseButtonEvent):
    event_type = EventType.MOUSE_BUTTON_PRESSED

    def __str__(self) -> str:
        return f"MouseButtonPressedEvent: {int(self.button)}"


class MouseButtonReleasedEvent(MouseButtonEvent):
    event_type = EventType.MOUSE_BUTTON_RELEASED

    def __str__(self) -> str:
        return f"MouseButtonReleasedEvent: {int(self.button)}"