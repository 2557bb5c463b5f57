import pytest

from overengine.events import (
    EventCategory,
    EventDispatcher,
    EventType,
    KeyCode,
    KeyEvent,
    KeyPressedEvent,
    KeyReleasedEvent,
    KeyTypedEvent,
    MouseButtonPressedEvent,
    MouseButtonReleasedEvent,
    MouseMovedEvent,
    MouseScrolledEvent,
    WindowCloseEvent,
    WindowLostFocusEvent,
    WindowMovedEvent,
    WindowResizeEvent,
)


def test_key_code_values_from_source():
    assert KeyCode(65) is KeyCode.A
    assert KeyCode(256) is KeyCode.ESCAPE
    assert KeyCode(0) is KeyCode.MOUSE_BUTTON_LEFT
    assert KeyCode(7) is KeyCode.MOUSE_BUTTON_LAST
    assert str(KeyReleasedEvent(KeyCode.ESCAPE)) == "KeyReleasedEvent: 256"
    assert str(KeyReleasedEvent(KeyCode.MOUSE_BUTTON_LEFT)) == "KeyReleasedEvent: 0"


def test_event_names_follow_type():
    assert WindowCloseEvent().name == "WindowClose"
    assert WindowLostFocusEvent().name == "WindowLostFocus"
    assert MouseButtonPressedEvent(0).name == "MouseButtonPressed"
    assert str(WindowCloseEvent()) == "WindowClose"


def test_string_forms():
    assert str(WindowResizeEvent(1280, 720)) == "WindowResizeEvent: 1280, 720"
    assert str(WindowMovedEvent(3, 4)) == "WindowMovedEvent: 3, 4"
    assert str(KeyPressedEvent(KeyCode.A, 2)) == "KeyPressedEvent: 65 (2 repeats)"
    assert str(KeyReleasedEvent(KeyCode.A)) == "KeyReleasedEvent: 65"
    assert str(KeyTypedEvent(KeyCode.A)) == "KeyTypedEvent: 65"
    assert str(MouseMovedEvent(1.5, 2.0)) == "MouseMovedEvent: 1.5, 2"
    assert str(MouseScrolledEvent(0.0, -1.0)) == "MouseScrolledEvent: 0, -1"
    assert str(MouseButtonReleasedEvent(1)) == "MouseButtonReleasedEvent: 1"


def test_categories():
    key = KeyPressedEvent(KeyCode.SPACE, 0)
    assert key.is_in_category(EventCategory.KEYBOARD)
    assert key.is_in_category(EventCategory.INPUT)
    assert not key.is_in_category(EventCategory.MOUSE)
    button = MouseButtonPressedEvent(0)
    assert button.is_in_category(EventCategory.MOUSE_BUTTON)
    assert not MouseMovedEvent(0, 0).is_in_category(EventCategory.MOUSE_BUTTON)
    assert WindowCloseEvent().is_in_category(EventCategory.APPLICATION)


def test_dispatch_matching_type_sets_handled():
    event = WindowResizeEvent(10, 20)
    seen = []

    def handler(e):
        seen.append((e.width, e.height))
        return True

    dispatcher = EventDispatcher(event)
    assert dispatcher.dispatch(WindowResizeEvent, handler) is True
    assert seen == [(10, 20)]
    assert event.handled is True


def test_dispatch_other_type_is_ignored():
    event = WindowCloseEvent()
    calls = []
    assert EventDispatcher(event).dispatch(KeyPressedEvent, calls.append) is False
    assert calls == []
    assert event.handled is False


def test_handled_is_sticky():
    event = KeyTypedEvent(KeyCode.B)
    dispatcher = EventDispatcher(event)
    dispatcher.dispatch(KeyTypedEvent, lambda e: True)
    dispatcher.dispatch(KeyTypedEvent, lambda e: False)
    assert event.handled is True


def test_dispatch_on_abstract_class_raises():
    with pytest.raises(TypeError):
        EventDispatcher(KeyPressedEvent(KeyCode.A, 0)).dispatch(KeyEvent, lambda e: True)


def test_event_type_attribute():
    assert KeyPressedEvent(KeyCode.A, 0).event_type is EventType.KEY_PRESSED