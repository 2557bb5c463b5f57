"""Undoable property changes and the undo/redo stack."""

from __future__ import annotations

from typing import Any, Callable, ClassVar, List, Optional


class Action:
    """Switches a property between two values through a setter."""

    def __init__(self, setter: Callable[[Any], None], first_value: Any, second_value: Any) -> None:
        self.setter = setter
        self.first_value = first_value
        self.second_value = second_value

    def perform(self) -> None:
        self.setter(self.second_value)

    def revert(self) -> None:
        self.setter(self.first_value)


class ActionStack:
    """Undo and redo history; the most recently created stack is the active one."""

    _active_instance: ClassVar[Optional["ActionStack"]] = None

    def __init__(self) -> None:
        self._undo: List[Action] = []
        self._redo: List[Action] = []
        ActionStack._active_instance = self

    @classmethod
    def get_active_instance(cls) -> "ActionStack":
        if ActionStack._active_instance is None:
            raise RuntimeError("no action stack has been created")
        return ActionStack._active_instance

    def reset(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def do(self, action: Action, perform: bool = True) -> None:
        if perform:
            action.perform()
        self._redo.clear()
        self._undo.append(action)

    def undo(self) -> Optional[Action]:
        if not self._undo:
            return None
        action = self._undo[-1]
        action.revert()
        self._undo.pop()
        self._redo.append(action)
        return action

    def redo(self) -> Optional[Action]:
        if not self._redo:
            return None
        action = self._redo[-1]
        action.perform()
        self._redo.pop()
        self._undo.append(action)
        return action