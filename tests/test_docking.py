import pytest

from overengine.docking import DockingLayout, DockNode, DockNodeFlags


def build_layout():
    root = DockNode(id=1, flags=DockNodeFlags.DOCK_SPACE, position=(0.0, 0.0), size=(800.0, 600.0))
    left = DockNode(id=2, parent_node=root, tabs=["Scene", "Game"], selected_tab=7,
                    position=(0.0, 0.0), size=(400.0, 600.0))
    right = DockNode(id=3, parent_node=root, flags=DockNodeFlags.CENTRAL_NODE,
                     tabs=["Inspector"], selected_tab=9, position=(400.0, 0.0), size=(400.0, 600.0))
    root.child_nodes = [left, right]
    root.split_ratio = 0.5
    root.split_axis = 0
    layout = DockingLayout()
    layout.root_node = root
    layout.nodes = {2: left, 3: right}
    return layout


def test_dock_node_defaults_are_leaf_root():
    node = DockNode()
    assert node.is_root_node()
    assert node.is_leaf_node()
    assert not node.is_split_node()
    assert node.is_floating_node()


def test_dock_node_flag_predicates():
    node = DockNode(flags=DockNodeFlags.DOCK_SPACE | DockNodeFlags.HIDDEN_TAB_BAR)
    assert node.is_dock_space()
    assert not node.is_floating_node()
    assert node.is_hidden_tab_bar()
    assert not node.is_central_node()


def test_save_writes_hex_ids_and_null_root_parent(tmp_path):
    path = tmp_path / "layout.yaml"
    build_layout().save(path)
    text = path.read_text()
    assert text.startswith("- ID: 0x1\n")
    assert "Parent: ~" in text
    assert "Parent: 0x1" in text


def test_round_trip_preserves_tree(tmp_path):
    path = tmp_path / "layout.yaml"
    build_layout().save(path)
    loaded = DockingLayout()
    loaded.load(path)

    root = loaded.root_node
    assert root.id == 1
    assert root.is_split_node()
    assert root.split_ratio == pytest.approx(0.5)
    assert root.split_axis == 0
    assert root.size == (800.0, 600.0)
    assert root.is_dock_space()

    left, right = root.child_nodes
    assert left.id == 2 and right.id == 3
    assert left.parent_node is root
    assert left.tabs == ["Scene", "Game"]
    assert left.selected_tab == 7
    assert right.is_central_node()
    assert right.position == (400.0, 0.0)
    assert right.is_leaf_node()


def test_get_node(tmp_path):
    layout = build_layout()
    assert layout.get_node(1) is layout.root_node
    assert layout.get_node(3) is layout.nodes[3]
    assert layout.get_node(99) is None


def test_child_listed_before_parent(tmp_path):
    path = tmp_path / "layout.yaml"
    path.write_text(
        "- ID: 0x1\n  Parent: ~\n  Flags: 1024\n  Position: [0, 0]\n  Size: [10, 10]\n"
        "  SplitRatio: 0.5\n  SplitAxis: 1\n"
        "- ID: 0x5\n  Parent: 0x7\n  Flags: 0\n  Position: [0, 0]\n  Size: [5, 5]\n"
        "- ID: 0x7\n  Parent: 0x1\n  Flags: 0\n  Position: [0, 0]\n  Size: [10, 5]\n"
    )
    layout = DockingLayout()
    layout.load(path)
    parent = layout.get_node(7)
    child = layout.get_node(5)
    assert parent.child_nodes[0] is child
    assert child.parent_node is parent
    assert layout.root_node.child_nodes[0] is parent


def test_unknown_parent_raises(tmp_path):
    path = tmp_path / "layout.yaml"
    path.write_text(
        "- ID: 0x1\n  Parent: ~\n  Flags: 0\n  Position: [0, 0]\n  Size: [1, 1]\n"
        "- ID: 0x2\n  Parent: 0x9\n  Flags: 0\n  Position: [0, 0]\n  Size: [1, 1]\n"
    )
    with pytest.raises(ValueError):
        DockingLayout().load(path)


def test_save_without_root_raises(tmp_path):
    with pytest.raises(ValueError):
        DockingLayout().save(tmp_path / "empty.yaml")


def test_load_empty_file_clears_layout(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    layout = build_layout()
    layout.load(path)
    assert layout.root_node is None
    assert layout.nodes == {}