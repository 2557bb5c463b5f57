"""Docking layouts as node trees, stored in YAML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

PathLike = Union[str, Path]


class DockNodeFlags(IntFlag):
    NONE = 0
    KEEP_ALIVE_ONLY = 1 << 0
    NO_DOCKING_IN_CENTRAL_NODE = 1 << 2
    PASSTHRU_CENTRAL_NODE = 1 << 3
    NO_SPLIT = 1 << 4
    NO_RESIZE = 1 << 5
    AUTO_HIDE_TAB_BAR = 1 << 6
    DOCK_SPACE = 1 << 10
    CENTRAL_NODE = 1 << 11
    NO_TAB_BAR = 1 << 12
    HIDDEN_TAB_BAR = 1 << 13


@dataclass(eq=False)
class DockNode:
    """One node of a docking tree; split nodes have two children."""

    id: int = 0
    parent_node: Optional["DockNode"] = None
    child_nodes: List[Optional["DockNode"]] = field(default_factory=lambda: [None, None])
    flags: DockNodeFlags = DockNodeFlags.NONE
    tabs: List[str] = field(default_factory=list)
    selected_tab: int = 0
    position: Tuple[float, float] = (0.0, 0.0)
    size: Tuple[float, float] = (0.0, 0.0)
    split_ratio: float = 0.0  # ratio of the first child
    split_axis: int = 0  # 0 = X, 1 = Y

    def is_root_node(self) -> bool:
        return self.parent_node is None

    def is_dock_space(self) -> bool:
        return bool(self.flags & DockNodeFlags.DOCK_SPACE)

    def is_floating_node(self) -> bool:
        return self.is_root_node() and not self.is_dock_space()

    def is_central_node(self) -> bool:
        return bool(self.flags & DockNodeFlags.CENTRAL_NODE)

    def is_hidden_tab_bar(self) -> bool:
        return bool(self.flags & DockNodeFlags.HIDDEN_TAB_BAR)

    def has_tab_bar(self) -> bool:
        return bool(self.flags & DockNodeFlags.NO_TAB_BAR)

    def is_split_node(self) -> bool:
        return self.child_nodes[0] is not None

    def is_leaf_node(self) -> bool:
        return self.child_nodes[0] is None


def _attach(node: DockNode, parent: DockNode) -> None:
    node.parent_node = parent
    if parent.child_nodes[0] is not None:
        parent.child_nodes[1] = node
    else:
        parent.child_nodes[0] = node


def _require(props: Dict[str, Any], key: str) -> Any:
    if key not in props or props[key] is None:
        raise ValueError(f"dock node entry is missing '{key}'")
    return props[key]


def _vec2(value: Any) -> Tuple[float, float]:
    values = tuple(float(v) for v in value)
    if len(values) != 2:
        raise ValueError("expected two components")
    return values  # type: ignore[return-value]


def _hex(value: int) -> str:
    return f"0x{value:x}"


def _flow(values: Any) -> str:
    return yaml.safe_dump(list(values), default_flow_style=True, width=float("inf")).strip()


def _serialize(node: DockNode) -> List[str]:
    lines = [f"ID: {_hex(node.id)}"]
    if node.parent_node is not None:
        lines.append(f"Parent: {_hex(node.parent_node.id)}")
    else:
        lines.append("Parent: ~")
    lines.append(f"Flags: {int(node.flags)}")
    if node.tabs:
        lines.append(f"Tabs: {_flow(node.tabs)}")
        lines.append(f"SelectedTab: {_hex(node.selected_tab)}")
    lines.append(f"Position: {_flow(float(v) for v in node.position)}")
    lines.append(f"Size: {_flow(float(v) for v in node.size)}")
    if node.is_split_node():
        lines.append(f"SplitRatio: {float(node.split_ratio)!r}")
        lines.append(f"SplitAxis: {int(node.split_axis)}")
    return ["- " + lines[0]] + ["  " + line for line in lines[1:]]


class DockingLayout:
    """A root node plus every other node of the tree, keyed by id."""

    def __init__(self) -> None:
        self.root_node: Optional[DockNode] = None
        self.nodes: Dict[int, DockNode] = {}

    def get_node(self, node_id: int) -> Optional[DockNode]:
        if self.root_node is not None and node_id == self.root_node.id:
            return self.root_node
        return self.nodes.get(node_id)

    def load(self, filepath: PathLike) -> None:
        with open(filepath, "r", encoding="utf-8") as stream:
            data = yaml.safe_load(stream)

        self.root_node = None
        self.nodes = {}
        if data is None:
            return
        if not isinstance(data, list):
            raise ValueError("a docking layout file holds a sequence of nodes")

        pending: List[Tuple[DockNode, int]] = []
        for props in data:
            if not isinstance(props, dict):
                raise ValueError("each dock node entry must be a mapping")
            node = DockNode(id=int(_require(props, "ID")))

            if self.root_node is None:
                self.root_node = node
            else:
                self.nodes[node.id] = node
                parent_id = int(_require(props, "Parent"))
                parent = self.get_node(parent_id)
                if parent is not None:
                    _attach(node, parent)
                else:
                    pending.append((node, parent_id))

            node.flags = DockNodeFlags(int(_require(props, "Flags")))

            if props.get("Tabs") is not None:
                node.tabs = [str(tab) for tab in props["Tabs"]]
                node.selected_tab = int(_require(props, "SelectedTab"))

            node.position = _vec2(_require(props, "Position"))
            node.size = _vec2(_require(props, "Size"))

            if props.get("SplitRatio") is not None:
                node.split_ratio = float(props["SplitRatio"])
                node.split_axis = int(_require(props, "SplitAxis"))

        for node, parent_id in pending:
            parent = self.get_node(parent_id)
            if parent is None:
                raise ValueError(f"dock node {_hex(node.id)} has unknown parent {_hex(parent_id)}")
            _attach(node, parent)

    def save(self, filepath: PathLike) -> None:
        if self.root_node is None:
            raise ValueError("cannot save a docking layout without a root node")
        lines = _serialize(self.root_node)
        for node_id in sorted(self.nodes):
            lines.extend(_serialize(self.nodes[node_id]))
        Path(filepath).write_text("\n".join(lines) + "\n", encoding="utf-8")